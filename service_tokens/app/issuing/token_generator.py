"""
Token generator for application-scoped API tokens.
"""

import re
import time
import uuid
from calendar import timegm
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Callable, Mapping, Union

from shared.config import TokenConfig, get_config
from shared.errors import InvalidJTIError, NotConfiguredError, ValidationError
from shared.logging import get_logger, bind_application_context, clear_context
from ..acl.paths import PathOptions, PathData, parse_path_entries, render_acl
from ..signing.signer import RS256Signer, PrivateKey


UUID4_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE
)

Timestamp = Union[int, float, datetime]
Clock = Callable[[], int]


def _system_clock() -> int:
    return int(time.time())


def _normalize_timestamp(timestamp: Timestamp) -> datetime:
    if isinstance(timestamp, datetime):
        if timestamp.tzinfo is None:
            return timestamp.replace(tzinfo=timezone.utc)
        return timestamp.astimezone(timezone.utc)
    # bool is an int subclass but never a valid instant
    if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    raise ValidationError(
        "Timestamp must be epoch seconds or a datetime",
        details={"type": type(timestamp).__name__}
    )


class TokenGenerator:
    """Builds and signs JWTs for a single application.

    Setters return the generator so calls can be chained::

        token = (TokenGenerator(app_id, private_key)
                 .set_ttl(300)
                 .add_path("/*/users/**", {"methods": ["GET"]})
                 .generate())

    ``generate()`` may be called repeatedly; ``iat``/``exp`` are re-read from
    the clock every time while the JWT ID stays fixed for the instance.
    Instances hold mutable state and are not safe for concurrent use.
    """

    def __init__(
        self,
        application_id: str,
        private_key: PrivateKey,
        clock: Optional[Clock] = None,
        config: Optional[TokenConfig] = None
    ):
        self.config = config or get_config()
        self.logger = get_logger("tokens.generator")

        self._application_id = application_id
        self.signer = RS256Signer(private_key)
        self.clock = clock or _system_clock

        self._ttl: int = self.config.default_ttl
        self._jti: Optional[str] = None
        self._nbf: Optional[datetime] = None
        self._subject: Optional[str] = None
        self._paths: Dict[str, PathOptions] = {}
        self._claims: Dict[str, Any] = {}

    @property
    def application_id(self) -> str:
        return self._application_id

    @classmethod
    def factory(
        cls,
        application_id: str,
        private_key: PrivateKey,
        options: Optional[Mapping[str, Any]] = None,
        clock: Optional[Clock] = None
    ) -> str:
        """Create a token in one call.

        Recognized options: ``ttl``, ``jti``, ``paths``, ``not_before``,
        ``sub`` / ``subject``. Every other key is added as a custom claim.
        """
        generator = cls(application_id, private_key, clock=clock)
        remaining = dict(options or {})

        if "ttl" in remaining:
            generator.set_ttl(remaining.pop("ttl"))

        if "jti" in remaining:
            generator.set_jti(remaining.pop("jti"))

        if "paths" in remaining:
            generator.set_paths(remaining.pop("paths"))

        if "not_before" in remaining:
            generator.set_not_before(remaining.pop("not_before"))

        if "subject" in remaining:
            generator.set_subject(remaining.pop("subject"))

        if "sub" in remaining:
            generator.set_subject(remaining.pop("sub"))

        for name, value in remaining.items():
            generator.add_claim(name, value)

        return generator.generate()

    def generate(self) -> str:
        """Assemble the claims and sign them."""
        iat = self.clock()
        exp = iat + self._ttl

        claims: Dict[str, Any] = {
            "iat": iat,
            "exp": exp,
            "jti": self.get_jti(),
            "application_id": self._application_id
        }

        if self._paths:
            claims["acl"] = render_acl(self._paths)

        if self._nbf is not None:
            claims["nbf"] = timegm(self._nbf.utctimetuple())

        if self._subject is not None:
            claims["sub"] = self._subject

        claims.update(self._claims)

        context = bind_application_context(self._application_id)
        try:
            token = self.signer.sign(claims)
            self.logger.debug(
                "Token generated",
                jti=claims["jti"],
                ttl=self._ttl,
                paths=len(self._paths),
                custom_claims=sorted(self._claims)
            )
            return token
        finally:
            clear_context(context)

    def get_jti(self) -> str:
        if self._jti is None:
            self._jti = str(uuid.uuid4())

        return self._jti

    def set_jti(self, jti: str) -> "TokenGenerator":
        if not isinstance(jti, str) or not UUID4_PATTERN.fullmatch(jti):
            self.logger.warning("Rejected invalid JTI", jti=repr(jti))
            raise InvalidJTIError(details={"jti": repr(jti)})

        self._jti = jti
        return self

    def get_not_before(self) -> datetime:
        if self._nbf is None:
            raise NotConfiguredError("Not Before time has not been set")

        return self._nbf

    def set_not_before(self, timestamp: Timestamp) -> "TokenGenerator":
        self._nbf = _normalize_timestamp(timestamp)
        return self

    def get_subject(self) -> str:
        if self._subject is None:
            raise NotConfiguredError("Subject has not been set")

        return self._subject

    def set_subject(self, subject: str) -> "TokenGenerator":
        self._subject = subject
        return self

    def get_ttl(self) -> int:
        return self._ttl

    def set_ttl(self, seconds: int) -> "TokenGenerator":
        # Zero and negative values are allowed and yield an already-expired token
        self._ttl = seconds
        return self

    def get_paths(self) -> Dict[str, PathOptions]:
        return self._paths

    def add_path(self, path: str, options: Union[PathOptions, Mapping[str, Any], None] = None) -> "TokenGenerator":
        """Grant ``path``, replacing any options it already had."""
        self._paths[path] = PathOptions.from_value(options)
        return self

    def set_paths(self, path_data: PathData) -> "TokenGenerator":
        """Replace all ACL paths.

        WARNING: existing paths are dropped. Entries may be bare path strings
        or ``{path: options}`` mappings, mixed freely.
        """
        entries = parse_path_entries(path_data)
        paths = {entry.path: PathOptions.from_value(entry.options) for entry in entries}

        self._paths = paths
        return self

    def add_claim(self, name: str, value: Any) -> "TokenGenerator":
        """Add a custom claim; it overrides any standard claim of the same name."""
        self._claims[name] = value
        return self


def factory(
    application_id: str,
    private_key: PrivateKey,
    options: Optional[Mapping[str, Any]] = None,
    clock: Optional[Clock] = None
) -> str:
    """Create a signed token in one call. See :meth:`TokenGenerator.factory`."""
    return TokenGenerator.factory(application_id, private_key, options, clock=clock)

"""
RS256 signing for issued tokens.
"""

import json
from calendar import timegm
from datetime import datetime
from typing import Dict, Any, Union

import jwt
from jwt.api_jws import PyJWS
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from shared.logging import get_logger
from shared.errors import SigningError


PrivateKey = Union[str, bytes, RSAPrivateKey]

TIME_CLAIMS = ("exp", "iat", "nbf")


class RS256Signer:
    """Binds a private key to the RS256 algorithm.

    The key is not parsed until :meth:`sign` is called, so a malformed key
    only surfaces when a token is actually produced. Claims are serialized
    here and signed as an opaque payload, so custom claims reach the token
    exactly as given.
    """

    algorithm = "RS256"
    token_type = "JWT"

    def __init__(self, private_key: PrivateKey):
        self.private_key = private_key
        self.logger = get_logger("tokens.signer")
        self._jws = PyJWS()

    @property
    def headers(self) -> Dict[str, str]:
        return {"alg": self.algorithm, "typ": self.token_type}

    @staticmethod
    def serialize(claims: Dict[str, Any]) -> bytes:
        """Encode claims as compact JSON; datetime time claims become epoch seconds."""
        payload = dict(claims)
        for name in TIME_CLAIMS:
            if isinstance(payload.get(name), datetime):
                payload[name] = timegm(payload[name].utctimetuple())

        return json.dumps(payload, separators=(",", ":")).encode("utf-8")

    def sign(self, claims: Dict[str, Any]) -> str:
        """Sign ``claims`` and return the compact serialization."""
        try:
            return self._jws.encode(
                self.serialize(claims),
                self.private_key,
                algorithm=self.algorithm,
                headers=self.headers
            )
        except (jwt.PyJWTError, UnsupportedAlgorithm, ValueError, TypeError, AttributeError) as e:
            self.logger.error(
                "Token signing failed",
                algorithm=self.algorithm,
                error=str(e),
                error_type=type(e).__name__
            )
            raise SigningError(
                f"Unable to sign token with {self.algorithm}: {e}",
                details={"algorithm": self.algorithm, "error_type": type(e).__name__}
            ) from e

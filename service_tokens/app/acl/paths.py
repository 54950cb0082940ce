"""
ACL path models for issued tokens.

A token may be restricted to a set of API path patterns. Each pattern maps
to an options object (currently an optional list of HTTP ``methods``, plus
any additional keys the consumer understands). The claim is always rendered
as ``{"paths": {<pattern>: {...}}}`` with every value a JSON object, even
when empty, so consumers can dereference members without type checks.
"""

from typing import Dict, Any, Optional, List, Mapping, Iterable, Union
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from shared.errors import ValidationError


class PathOptions(BaseModel):
    """Options attached to a single ACL path."""

    model_config = ConfigDict(extra="allow")

    methods: Optional[List[str]] = Field(None, description="HTTP verbs allowed on the path")

    @classmethod
    def from_value(cls, options: Union["PathOptions", Mapping[str, Any], None]) -> "PathOptions":
        """Build options from a mapping, an existing instance or nothing."""
        if options is None:
            return cls()
        if isinstance(options, PathOptions):
            return options.model_copy(deep=True)
        if not isinstance(options, Mapping):
            raise ValidationError(
                "Path options must be a mapping",
                details={"type": type(options).__name__}
            )

        try:
            return cls.model_validate(dict(options))
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid path options",
                details={"errors": e.errors(include_url=False)}
            ) from e

    def to_claim(self) -> Dict[str, Any]:
        """Render as the JSON object stored under ``acl.paths``.

        Options are carried verbatim; only a ``methods`` field the caller
        never supplied is left out.
        """
        claim = self.model_dump()
        if "methods" not in self.model_fields_set:
            claim.pop("methods", None)
        return claim


@dataclass(frozen=True)
class PathEntry:
    """A decoded ``set_paths`` entry: a bare path, or a path with options."""
    path: str
    options: Optional[Mapping[str, Any]] = None


PathData = Union[Mapping[str, Any], Iterable[Any]]


def _check_path(path: Any) -> str:
    if not isinstance(path, str):
        raise ValidationError(
            "ACL path must be a string",
            details={"type": type(path).__name__}
        )
    return path


def parse_path_entries(path_data: PathData) -> List[PathEntry]:
    """Decode bulk path data into entries.

    Accepted shapes:

    - ``{"/a/**": {...}, "/b/**": None}``
    - ``["/a/**", {"/b/**": {"methods": ["GET"]}}, ("/c/**", {...})]``

    A bare string item grants the path with no options. Nothing is applied
    here; a malformed item raises before any caller state changes.
    """
    if isinstance(path_data, Mapping):
        return [PathEntry(_check_path(path), options) for path, options in path_data.items()]

    if isinstance(path_data, (str, bytes)):
        raise ValidationError(
            "Path data must be a collection of paths, not a single string",
            details={"path_data": path_data if isinstance(path_data, str) else repr(path_data)}
        )

    entries: List[PathEntry] = []
    for item in path_data:
        if isinstance(item, str):
            entries.append(PathEntry(item))
        elif isinstance(item, Mapping):
            for path, options in item.items():
                entries.append(PathEntry(_check_path(path), options))
        elif isinstance(item, tuple) and len(item) == 2:
            entries.append(PathEntry(_check_path(item[0]), item[1]))
        else:
            raise ValidationError(
                "Unsupported path entry",
                details={"entry": repr(item)}
            )

    return entries


def render_acl(paths: Mapping[str, PathOptions]) -> Dict[str, Any]:
    """Render the ``acl`` claim value for the given paths."""
    return {
        "paths": {path: options.to_claim() for path, options in paths.items()}
    }

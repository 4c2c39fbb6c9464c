"""Data types for registry records."""

from dataclasses import dataclass
from typing import NamedTuple, Optional

from .errors import MalformedRecordError, SelectionError


class APIVersion(NamedTuple):
    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


def parse_version(raw: str) -> APIVersion:
    """Parse ``"4.3"`` into ``APIVersion(4, 3)``."""
    parts = raw.strip().split(".")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise SelectionError("version", raw, ["<major>.<minor>, e.g. 4.3"])
    return APIVersion(int(parts[0]), int(parts[1]))


@dataclass(frozen=True)
class Removal:
    """A ``<remove>`` entry: removed at ``version`` for ``profile`` (None = all)."""

    version: APIVersion
    profile: Optional[str] = None


@dataclass(frozen=True)
class GLTypeAlias:
    """Represents a registry type name and its Mojo type."""

    name: str  # "GLenum"
    target: str  # "UInt32"


@dataclass(frozen=True)
class GLEnum:
    """Represents an API constant."""

    identifier: str  # "COLOR_BUFFER_BIT"
    value: str  # "0x00004000"
    type_override: Optional[str] = None  # "GLuint64"
    introduced_in: Optional[APIVersion] = None
    removed_in: tuple[Removal, ...] = ()
    extension: Optional[str] = None
    profile: Optional[str] = None
    group: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.identifier:
            raise MalformedRecordError(self.value or "<enum>", "identifier")
        if not self.value:
            raise MalformedRecordError(self.identifier, "value")


@dataclass(frozen=True)
class GLBinding:
    """Represents a function parameter or a return slot."""

    identifier: str  # "mask"
    type_name: str  # "GLbitfield", "const GLchar *"
    group: Optional[str] = None
    length: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.identifier:
            raise MalformedRecordError(self.type_name or "<binding>", "identifier")
        if not self.type_name:
            raise MalformedRecordError(self.identifier, "type_name")

    @property
    def is_pointer(self) -> bool:
        return "*" in self.type_name or "[" in self.type_name


@dataclass(frozen=True)
class GLCommand:
    """Represents an API function."""

    identifier: str  # "Clear"
    return_binding: GLBinding
    parameters: tuple[GLBinding, ...] = ()
    is_safe: bool = True
    alias: Optional[str] = None
    introduced_in: Optional[APIVersion] = None
    removed_in: tuple[Removal, ...] = ()
    extension: Optional[str] = None
    profile: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.identifier:
            raise MalformedRecordError("<command>", "identifier")
        if self.return_binding is None:
            raise MalformedRecordError(self.identifier, "return")

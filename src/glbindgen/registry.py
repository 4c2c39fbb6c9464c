"""Registry model: namespaces and the enum/command aggregate."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from .errors import SelectionError
from .typemap import type_aliases
from .types import GLCommand, GLEnum, GLTypeAlias

if TYPE_CHECKING:
    from .resolve import Filter


@dataclass(frozen=True)
class Namespace:
    """Static description of one supported API family."""

    name: str  # "gl"
    xml_file: str  # "gl.xml"
    command_prefix: str  # "gl"
    enum_prefix: str  # "GL_"
    struct_name: str  # "Gl"
    enum_type: str  # "GLenum"
    bool_type: str  # "GLboolean"
    url: str


_GL_URL = "https://raw.githubusercontent.com/KhronosGroup/OpenGL-Registry/main/xml/"
_EGL_URL = "https://raw.githubusercontent.com/KhronosGroup/EGL-Registry/main/api/"

NAMESPACES: dict[str, Namespace] = {
    "gl": Namespace("gl", "gl.xml", "gl", "GL_", "Gl", "GLenum", "GLboolean", _GL_URL + "gl.xml"),
    "gles1": Namespace(
        "gles1", "gl.xml", "gl", "GL_", "Gles1", "GLenum", "GLboolean", _GL_URL + "gl.xml"
    ),
    "gles2": Namespace(
        "gles2", "gl.xml", "gl", "GL_", "Gles2", "GLenum", "GLboolean", _GL_URL + "gl.xml"
    ),
    "glx": Namespace("glx", "glx.xml", "glX", "GLX_", "Glx", "GLenum", "Bool", _GL_URL + "glx.xml"),
    "wgl": Namespace("wgl", "wgl.xml", "wgl", "WGL_", "Wgl", "GLenum", "BOOL", _GL_URL + "wgl.xml"),
    "egl": Namespace(
        "egl", "egl.xml", "egl", "EGL_", "Egl", "EGLenum", "EGLBoolean", _EGL_URL + "egl.xml"
    ),
}

DEFAULT_NAMESPACE = "gl"


def get_namespace(name: str) -> Namespace:
    try:
        return NAMESPACES[name]
    except KeyError:
        raise SelectionError("api", name, NAMESPACES) from None


class Registry:
    """Enums and commands of one namespace.

    A raw registry holds every record the document yields, duplicates and
    gating metadata included. A resolved registry (``is_resolved``) holds the
    deduplicated subset for one selection and is what generators consume.
    """

    def __init__(
        self,
        namespace: str,
        enums: Iterable[GLEnum] = (),
        commands: Iterable[GLCommand] = (),
        extensions: Iterable[str] = (),
        *,
        resolved: bool = False,
        selection: Optional["Filter"] = None,
    ) -> None:
        self._namespace = get_namespace(namespace)
        self._enums = tuple(enums)
        self._commands = tuple(commands)
        self._extensions = tuple(dict.fromkeys(extensions))
        self._resolved = resolved
        self._selection = selection

    def namespace(self) -> str:
        return self._namespace.name

    def namespace_info(self) -> Namespace:
        return self._namespace

    def enums(self) -> tuple[GLEnum, ...]:
        return self._enums

    def commands(self) -> tuple[GLCommand, ...]:
        return self._commands

    def type_aliases(self) -> tuple[GLTypeAlias, ...]:
        return type_aliases(self._namespace.name)

    def extensions(self) -> tuple[str, ...]:
        """Every extension name the document declares for this namespace."""
        return self._extensions

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    @property
    def selection(self) -> Optional["Filter"]:
        return self._selection

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Registry):
            return NotImplemented
        return (
            self._namespace == other._namespace
            and self._enums == other._enums
            and self._commands == other._commands
            and self._extensions == other._extensions
            and self._resolved == other._resolved
            and self._selection == other._selection
        )

    def __hash__(self) -> int:
        return hash((self._namespace, self._enums, self._commands, self._resolved))

    def __repr__(self) -> str:
        state = "resolved" if self._resolved else "raw"
        return (
            f"Registry({self._namespace.name!r}, {state}, "
            f"{len(self._enums)} enums, {len(self._commands)} commands)"
        )

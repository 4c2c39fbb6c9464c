"""Registry type names to Mojo type expressions."""

import re

from .errors import SelectionError, UnknownTypeError
from .types import GLTypeAlias

# Opaque handles and untyped pointers
VOID_POINTER = "Pointer[UInt8]"

# C spellings that appear in parameter declarations
C_PRIMITIVES = {
    "void": "NoneType",
    "GLvoid": "NoneType",
    "char": "Int8",
    "signed char": "Int8",
    "unsigned char": "UInt8",
    "short": "Int16",
    "unsigned short": "UInt16",
    "int": "Int32",
    "unsigned int": "UInt32",
    "long": "Int",
    "unsigned long": "UInt",
    "float": "Float32",
    "double": "Float64",
    "int8_t": "Int8",
    "uint8_t": "UInt8",
    "int16_t": "Int16",
    "uint16_t": "UInt16",
    "int32_t": "Int32",
    "uint32_t": "UInt32",
    "int64_t": "Int64",
    "uint64_t": "UInt64",
    "size_t": "UInt",
    "ssize_t": "Int",
    "intptr_t": "Int",
    "ptrdiff_t": "Int",
}

_GL_ALIASES = (
    ("GLenum", "UInt32"),
    ("GLboolean", "UInt8"),
    ("GLbitfield", "UInt32"),
    ("GLbyte", "Int8"),
    ("GLshort", "Int16"),
    ("GLint", "Int32"),
    ("GLclampx", "Int32"),
    ("GLubyte", "UInt8"),
    ("GLushort", "UInt16"),
    ("GLuint", "UInt32"),
    ("GLsizei", "Int32"),
    ("GLfloat", "Float32"),
    ("GLclampf", "Float32"),
    ("GLdouble", "Float64"),
    ("GLclampd", "Float64"),
    ("GLchar", "UInt8"),
    ("GLcharARB", "UInt8"),
    ("GLhandleARB", "UInt32"),
    ("GLhalf", "UInt16"),
    ("GLhalfARB", "UInt16"),
    ("GLhalfNV", "UInt16"),
    ("GLfixed", "Int32"),
    ("GLintptr", "Int"),
    ("GLintptrARB", "Int"),
    ("GLsizeiptr", "Int"),
    ("GLsizeiptrARB", "Int"),
    ("GLint64", "Int64"),
    ("GLint64EXT", "Int64"),
    ("GLuint64", "UInt64"),
    ("GLuint64EXT", "UInt64"),
    ("GLsync", VOID_POINTER),
    ("GLeglImageOES", VOID_POINTER),
    ("GLeglClientBufferEXT", VOID_POINTER),
    ("GLvdpauSurfaceNV", "Int"),
    ("GLDEBUGPROC", VOID_POINTER),
    ("GLDEBUGPROCARB", VOID_POINTER),
    ("GLDEBUGPROCKHR", VOID_POINTER),
    ("GLDEBUGPROCAMD", VOID_POINTER),
    ("GLVULKANPROCNV", VOID_POINTER),
    ("_cl_context", "UInt8"),
    ("_cl_event", "UInt8"),
)

_X_ALIASES = (
    ("XID", "UInt"),
    ("Bool", "Int32"),
    ("Status", "Int32"),
    ("VisualID", "UInt"),
    ("Pixmap", "UInt"),
    ("Font", "UInt"),
    ("Window", "UInt"),
    ("Colormap", "UInt"),
    ("Display", "UInt8"),
    ("XVisualInfo", "UInt8"),
    # SGIX video and digital media
    ("VLServer", VOID_POINTER),
    ("VLPath", "Int32"),
    ("VLNode", "Int32"),
    ("DMbuffer", VOID_POINTER),
    ("DMparams", "UInt8"),
)

_GLX_ALIASES = (
    ("GLXFBConfigID", "UInt"),
    ("GLXFBConfig", VOID_POINTER),
    ("GLXContextID", "UInt"),
    ("GLXContext", VOID_POINTER),
    ("GLXPixmap", "UInt"),
    ("GLXDrawable", "UInt"),
    ("GLXWindow", "UInt"),
    ("GLXPbuffer", "UInt"),
    ("GLXVideoCaptureDeviceNV", "UInt"),
    ("GLXVideoDeviceNV", "UInt32"),
    ("GLXVideoSourceSGIX", "UInt"),
    ("GLXFBConfigIDSGIX", "UInt"),
    ("GLXFBConfigSGIX", VOID_POINTER),
    ("GLXPbufferSGIX", "UInt"),
    ("GLXHyperpipeNetworkSGIX", "UInt8"),
    ("GLXHyperpipeConfigSGIX", "UInt8"),
    ("GLXPipeRect", "UInt8"),
    ("GLXPipeRectLimits", "UInt8"),
    ("__GLXextFuncPtr", VOID_POINTER),
)

_WIN_ALIASES = (
    ("BOOL", "Int32"),
    ("BYTE", "UInt8"),
    ("CHAR", "Int8"),
    ("DWORD", "UInt32"),
    ("FLOAT", "Float32"),
    ("HANDLE", VOID_POINTER),
    ("HDC", VOID_POINTER),
    ("HENHMETAFILE", VOID_POINTER),
    ("HGLRC", VOID_POINTER),
    ("HGPUNV", VOID_POINTER),
    ("HPBUFFERARB", VOID_POINTER),
    ("HPBUFFEREXT", VOID_POINTER),
    ("HPGPUNV", VOID_POINTER),
    ("HPVIDEODEV", VOID_POINTER),
    ("HVIDEOINPUTDEVICENV", VOID_POINTER),
    ("HVIDEOOUTPUTDEVICENV", VOID_POINTER),
    ("INT", "Int32"),
    ("INT32", "Int32"),
    ("INT64", "Int64"),
    ("LPCSTR", VOID_POINTER),
    ("LPGLYPHMETRICSFLOAT", VOID_POINTER),
    ("LPLAYERPLANEDESCRIPTOR", VOID_POINTER),
    ("LPPIXELFORMATDESCRIPTOR", VOID_POINTER),
    ("LPVOID", VOID_POINTER),
    ("PROC", VOID_POINTER),
    ("UINT", "UInt32"),
    ("USHORT", "UInt16"),
    ("VOID", "NoneType"),
    ("COLORREF", "UInt32"),
    ("RECT", "UInt8"),
    ("LAYERPLANEDESCRIPTOR", "UInt8"),
    ("PIXELFORMATDESCRIPTOR", "UInt8"),
    ("GPU_DEVICE", "UInt8"),
    ("GLYPHMETRICSFLOAT", "UInt8"),
    ("PGLYPHMETRICSFLOAT", VOID_POINTER),
    ("POINTFLOAT", "UInt8"),
    ("WGLSWAP", "UInt8"),
)

_WGL_ALIASES = (
    ("PGPU_DEVICE", VOID_POINTER),
)

_EGL_ALIASES = (
    ("khronos_utime_nanoseconds_t", "UInt64"),
    ("khronos_uint64_t", "UInt64"),
    ("khronos_ssize_t", "Int"),
    ("EGLint", "Int32"),
    ("EGLBoolean", "UInt32"),
    ("EGLenum", "UInt32"),
    ("EGLAttrib", "Int"),
    ("EGLAttribKHR", "Int"),
    ("EGLTime", "UInt64"),
    ("EGLTimeKHR", "UInt64"),
    ("EGLTimeNV", "UInt64"),
    ("EGLuint64KHR", "UInt64"),
    ("EGLuint64NV", "UInt64"),
    ("EGLnsecsANDROID", "Int64"),
    ("EGLsizeiANDROID", "Int"),
    ("EGLNativeFileDescriptorKHR", "Int32"),
    ("EGLConfig", VOID_POINTER),
    ("EGLContext", VOID_POINTER),
    ("EGLDisplay", VOID_POINTER),
    ("EGLSurface", VOID_POINTER),
    ("EGLClientBuffer", VOID_POINTER),
    ("EGLImage", VOID_POINTER),
    ("EGLImageKHR", VOID_POINTER),
    ("EGLSync", VOID_POINTER),
    ("EGLSyncKHR", VOID_POINTER),
    ("EGLSyncNV", VOID_POINTER),
    ("EGLStreamKHR", VOID_POINTER),
    ("EGLDeviceEXT", VOID_POINTER),
    ("EGLOutputLayerEXT", VOID_POINTER),
    ("EGLOutputPortEXT", VOID_POINTER),
    ("EGLLabelKHR", VOID_POINTER),
    ("EGLObjectKHR", VOID_POINTER),
    ("EGLDEBUGPROCKHR", VOID_POINTER),
    ("EGLSetBlobFuncANDROID", VOID_POINTER),
    ("EGLGetBlobFuncANDROID", VOID_POINTER),
    ("EGLNativeDisplayType", VOID_POINTER),
    ("EGLNativePixmapType", VOID_POINTER),
    ("EGLNativeWindowType", VOID_POINTER),
    ("NativeDisplayType", VOID_POINTER),
    ("NativePixmapType", VOID_POINTER),
    ("NativeWindowType", VOID_POINTER),
    ("__eglMustCastToProperFunctionPointerType", VOID_POINTER),
    ("AHardwareBuffer", "UInt8"),
    ("wl_display", "UInt8"),
    ("wl_resource", "UInt8"),
    ("wl_buffer", "UInt8"),
    ("EGLClientPixmapHI", "UInt8"),
)


def _table(*groups: tuple[tuple[str, str], ...]) -> tuple[GLTypeAlias, ...]:
    return tuple(GLTypeAlias(name, target) for group in groups for name, target in group)


TYPE_ALIASES: dict[str, tuple[GLTypeAlias, ...]] = {
    "gl": _table(_GL_ALIASES),
    "gles1": _table(_GL_ALIASES),
    "gles2": _table(_GL_ALIASES),
    "glx": _table(_GL_ALIASES, _X_ALIASES, _GLX_ALIASES),
    "wgl": _table(_GL_ALIASES, _WIN_ALIASES, _WGL_ALIASES),
    "egl": _table(_EGL_ALIASES),
}

# Mojo builtin types that an emitted alias must not shadow
MOJO_BUILTINS = frozenset(
    {"Bool", "Int", "UInt", "String", "NoneType", "Float32", "Float64", "Pointer"}
)

_QUALIFIERS = {"const", "struct", "unsigned", "signed"}
_ARRAY_RE = re.compile(r"\[[^\]]*\]")


def type_aliases(namespace: str) -> tuple[GLTypeAlias, ...]:
    """Return the alias table for ``namespace``."""
    try:
        return TYPE_ALIASES[namespace]
    except KeyError:
        raise SelectionError("api", namespace, TYPE_ALIASES) from None


def alias_name(name: str) -> str:
    """Name an alias is emitted under; builtin names get a trailing ``_``."""
    if name in MOJO_BUILTINS:
        return name + "_"
    return name


def split_c_type(type_name: str) -> tuple[str, int]:
    """Split a C declaration into its base type and pointer depth.

    ``"const GLchar *const*"`` -> ``("GLchar", 2)``. Array suffixes count as
    one level of indirection each.
    """
    text, arrays = _ARRAY_RE.subn("*", type_name)
    depth = text.count("*")
    words = text.replace("*", " ").split()
    signedness = [w for w in words if w in ("unsigned", "signed")]
    words = [w for w in words if w not in _QUALIFIERS]
    base = " ".join(signedness + words)
    return base, depth


def mojo_type(type_name: str, namespace: str, owner: str) -> str:
    """Render a registry type as the Mojo type used in emitted signatures.

    Alias names are kept as written since the emitted module declares them,
    except names that would shadow a Mojo builtin (``Bool`` -> ``Bool_``).
    Raises UnknownTypeError for names found in neither table.
    """
    base, depth = split_c_type(type_name)
    aliases = {alias.name for alias in type_aliases(namespace)}

    if base in aliases:
        rendered = alias_name(base)
    elif base in C_PRIMITIVES:
        rendered = C_PRIMITIVES[base]
    else:
        raise UnknownTypeError(base or type_name, owner)

    for _ in range(depth):
        if rendered == "NoneType":
            rendered = VOID_POINTER
        else:
            rendered = f"Pointer[{rendered}]"
    return rendered


def is_pointer_type(type_name: str, namespace: str) -> bool:
    """Whether ``type_name`` renders as a pointer, directly or via its alias."""
    base, depth = split_c_type(type_name)
    if depth:
        return True
    targets = {alias.name: alias.target for alias in type_aliases(namespace)}
    return targets.get(base, "").startswith("Pointer[")

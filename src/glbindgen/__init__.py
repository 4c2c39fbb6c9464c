"""glbindgen - Khronos registry to Mojo binding generator."""

__version__ = "0.2.0"

from .errors import (
    BindgenError,
    MalformedRecordError,
    SelectionError,
    UnknownExtensionError,
    UnknownTypeError,
)
from .generators import GENERATORS, generate, get_generator
from .parser import load_registry, parse_registry
from .registry import NAMESPACES, Registry
from .resolve import Filter, resolve
from .types import APIVersion, GLBinding, GLCommand, GLEnum, GLTypeAlias, Removal

__all__ = [
    "APIVersion",
    "BindgenError",
    "Filter",
    "GENERATORS",
    "GLBinding",
    "GLCommand",
    "GLEnum",
    "GLTypeAlias",
    "MalformedRecordError",
    "NAMESPACES",
    "Registry",
    "Removal",
    "SelectionError",
    "UnknownExtensionError",
    "UnknownTypeError",
    "generate",
    "get_generator",
    "load_registry",
    "parse_registry",
    "resolve",
]

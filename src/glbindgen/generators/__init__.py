"""Output layouts for a resolved registry."""

from typing import Protocol

from ..errors import SelectionError
from ..registry import Registry
from .global_gen import GlobalGenerator
from .static_gen import StaticGenerator
from .static_struct_gen import StaticStructGenerator
from .struct_gen import StructGenerator


class Generator(Protocol):
    """Turns a resolved registry into Mojo source fragments."""

    name: str

    def write(self, registry: Registry) -> list[str]: ...


GENERATORS: dict[str, Generator] = {
    "static": StaticGenerator(),
    "global": GlobalGenerator(),
    "struct": StructGenerator(),
    "static_struct": StaticStructGenerator(),
}

DEFAULT_GENERATOR = "static"


def get_generator(name: str) -> Generator:
    try:
        return GENERATORS[name]
    except KeyError:
        raise SelectionError("generator", name, GENERATORS) from None


def generate(registry: Registry, generator: str = DEFAULT_GENERATOR) -> str:
    """Run one generator and join its fragments into a module."""
    return "\n".join(get_generator(generator).write(registry))


__all__ = [
    "DEFAULT_GENERATOR",
    "GENERATORS",
    "Generator",
    "GlobalGenerator",
    "StaticGenerator",
    "StaticStructGenerator",
    "StructGenerator",
    "generate",
    "get_generator",
]

"""A stateless struct whose methods call directly linked symbols."""

from ..registry import Registry
from .common import (
    INDENT,
    LOAD_SOURCES,
    PROC_LOADER_ALIAS,
    render_docstring,
    render_enums,
    render_external_call,
    render_header,
    render_parameters,
    render_return,
    render_type_aliases,
    struct_name,
)


class StaticStructGenerator:
    """Same call surface as the struct layout, without any loading.

    ``load_with`` only exists so the two layouts are interchangeable.
    """

    name = "static_struct"

    def write(self, registry: Registry) -> list[str]:
        return [
            render_header(
                registry,
                self.name,
                ["from sys import DLHandle", "from sys.ffi import external_call"],
            ),
            render_type_aliases(registry),
            render_enums(registry),
            PROC_LOADER_ALIAS + "\n",
            self.write_struct(registry),
        ]

    def write_struct(self, registry: Registry) -> str:
        namespace = registry.namespace()
        api = struct_name(namespace)
        lines = ["@value", f"struct {api}:"]
        for param, source_type in LOAD_SOURCES:
            if len(lines) > 2:
                lines.append("")
            lines.extend(
                [
                    f"{INDENT}@staticmethod",
                    f"{INDENT}fn load_with({param}: {source_type}) -> {api}:",
                    f'{INDENT}{INDENT}"""Stub loader; the symbols are linked statically."""',
                    f"{INDENT}{INDENT}return {api}()",
                ]
            )
        for cmd in registry.commands():
            params = ", ".join(["self"] + render_parameters(cmd, True, True, namespace))
            lines.append("")
            lines.append(f"{INDENT}fn {cmd.identifier}({params}) -> {render_return(cmd, namespace)}:")
            lines.extend(render_docstring(cmd, INDENT * 2))
            lines.append(f"{INDENT}{INDENT}return {render_external_call(cmd, namespace)}")
        return "\n".join(lines) + "\n"

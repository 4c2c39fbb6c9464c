"""Free functions calling directly linked symbols."""

from ..registry import Registry
from .common import (
    INDENT,
    render_docstring,
    render_enums,
    render_external_call,
    render_header,
    render_parameters,
    render_return,
    render_type_aliases,
)


class StaticGenerator:
    """Every command is a plain function over ``external_call``.

    No loading step exists; the symbols must be resolvable when the program
    is linked.
    """

    name = "static"

    def write(self, registry: Registry) -> list[str]:
        return [
            render_header(registry, self.name, ["from sys.ffi import external_call"]),
            render_type_aliases(registry),
            render_enums(registry),
            self.write_fns(registry),
        ]

    def write_fns(self, registry: Registry) -> str:
        namespace = registry.namespace()
        lines = ["# Functions"]
        for cmd in registry.commands():
            params = ", ".join(render_parameters(cmd, True, True, namespace))
            lines.append("")
            lines.append(f"fn {cmd.identifier}({params}) -> {render_return(cmd, namespace)}:")
            lines.extend(render_docstring(cmd, INDENT))
            lines.append(f"{INDENT}return {render_external_call(cmd, namespace)}")
        return "\n".join(lines) + "\n"

"""A struct holding one function-pointer field per command."""

from ..registry import Registry
from .common import (
    FNPTR_STRUCT,
    INDENT,
    LOAD_SOURCES,
    LOADER_IMPORTS,
    BindingTable,
    FnSlot,
    render_docstring,
    render_enums,
    render_header,
    render_parameters,
    render_return,
    render_type_aliases,
    struct_name,
)


class StructGenerator:
    """Pointers live in a value built from a ``ProcLoader`` or a ``DLHandle``.

    Construction resolves every field, falling back to an aborting stub for
    symbols that cannot be resolved.
    """

    name = "struct"

    def write(self, registry: Registry) -> list[str]:
        table = BindingTable(registry)
        return [
            render_header(registry, self.name, LOADER_IMPORTS),
            render_type_aliases(registry),
            render_enums(registry),
            table.render_fn_aliases(),
            FNPTR_STRUCT,
            table.render_failing_fns(),
            self.write_struct(registry, table),
        ]

    @staticmethod
    def field_name(slot: FnSlot) -> str:
        return f"_{slot.identifier}"

    def write_struct(self, registry: Registry, table: BindingTable) -> str:
        api = struct_name(registry.namespace())
        lines = ["@value", f"struct {api}:"]
        for slot in table:
            lines.append(f"{INDENT}var {self.field_name(slot)}: FnPtr[{slot.fn_alias}]")

        for param, source_type in LOAD_SOURCES:
            lines.extend(
                [
                    "",
                    f"{INDENT}fn __init__(out self, {param}: {source_type}):",
                    f'{INDENT}{INDENT}"""Load each symbol through ``{param}``."""',
                ]
            )
            for slot in table:
                lines.append(
                    f"{INDENT}{INDENT}self.{self.field_name(slot)} = "
                    f'_load_fn[{slot.fn_alias}]({param}, "{slot.symbol}", {slot.failing})'
                )
            if not len(table):
                lines.append(f"{INDENT}{INDENT}pass")

        for slot in table:
            lines.extend(self.write_method(slot, table.namespace))
        return "\n".join(lines) + "\n"

    def write_method(self, slot: FnSlot, namespace: str) -> list[str]:
        cmd = slot.command
        params = ", ".join(["self"] + render_parameters(cmd, True, True, namespace))
        args = ", ".join(render_parameters(cmd, False, True, namespace))
        field = self.field_name(slot)
        return [
            "",
            f"{INDENT}fn {cmd.identifier}({params}) -> {render_return(cmd, namespace)}:",
            *render_docstring(cmd, INDENT * 2),
            f"{INDENT}{INDENT}return self.{field}.f({args})",
            "",
            f"{INDENT}fn {cmd.identifier}_is_loaded(self) -> Bool:",
            f"{INDENT}{INDENT}return self.{field}.is_loaded",
        ]

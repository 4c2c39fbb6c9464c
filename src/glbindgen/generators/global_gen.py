"""Free functions backed by module-level function-pointer slots."""

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
)


class GlobalGenerator:
    """Each command reads its pointer from a global ``FnPtr`` slot.

    Slots start on a stub that aborts. ``<Cmd>_load_with`` loads one slot and
    ``load_with`` loads them all, through either a ``ProcLoader`` resolver or a
    ``DLHandle``, and ``<Cmd>_is_loaded`` reports the state.
    """

    name = "global"

    def write(self, registry: Registry) -> list[str]:
        table = BindingTable(registry)
        return [
            render_header(registry, self.name, LOADER_IMPORTS),
            render_type_aliases(registry),
            render_enums(registry),
            table.render_fn_aliases(),
            FNPTR_STRUCT,
            table.render_failing_fns(),
            self.write_storage(table),
            self.write_fns(table),
            self.write_fn_mods(table),
            self.write_load_fn(table),
        ]

    @staticmethod
    def storage_name(slot: FnSlot) -> str:
        return f"_storage_{slot.identifier}"

    def write_storage(self, table: BindingTable) -> str:
        lines = ["# Function pointer storage"]
        for slot in table:
            lines.append(
                f"var {self.storage_name(slot)} = FnPtr[{slot.fn_alias}]({slot.failing}, False)"
            )
        return "\n".join(lines) + "\n"

    def write_fns(self, table: BindingTable) -> str:
        lines = ["# Functions"]
        for slot in table:
            cmd = slot.command
            params = ", ".join(render_parameters(cmd, True, True, table.namespace))
            args = ", ".join(render_parameters(cmd, False, True, table.namespace))
            lines.append("")
            lines.append(f"fn {cmd.identifier}({params}) -> {render_return(cmd, table.namespace)}:")
            lines.extend(render_docstring(cmd, INDENT))
            lines.append(f"{INDENT}return {self.storage_name(slot)}.f({args})")
        return "\n".join(lines) + "\n"

    def write_fn_mods(self, table: BindingTable) -> str:
        lines = ["# Per-function loading"]
        for slot in table:
            storage = self.storage_name(slot)
            lines.extend(
                [
                    "",
                    f"fn {slot.identifier}_is_loaded() -> Bool:",
                    f"{INDENT}return {storage}.is_loaded",
                ]
            )
            for param, source_type in LOAD_SOURCES:
                lines.extend(
                    [
                        "",
                        f"fn {slot.identifier}_load_with({param}: {source_type}):",
                        f'{INDENT}var loaded = _load_fn[{slot.fn_alias}]({param}, "{slot.symbol}", {slot.failing})',
                        f"{INDENT}if loaded.is_loaded:",
                        f"{INDENT}{INDENT}{storage} = loaded",
                    ]
                )
        return "\n".join(lines) + "\n"

    def write_load_fn(self, table: BindingTable) -> str:
        lines = []
        for param, source_type in LOAD_SOURCES:
            if lines:
                lines.append("")
            lines.extend(
                [
                    f"fn load_with({param}: {source_type}):",
                    f'{INDENT}"""Load every function pointer through ``{param}``.',
                    "",
                    f"{INDENT}Symbols that cannot be resolved keep their aborting placeholder.",
                    f'{INDENT}"""',
                ]
            )
            for slot in table:
                lines.append(f"{INDENT}{slot.identifier}_load_with({param})")
            if not len(table):
                lines.append(f"{INDENT}pass")
        return "\n".join(lines) + "\n"

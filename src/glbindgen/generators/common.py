"""Formatting helpers shared by every generator."""

from dataclasses import dataclass
from typing import Iterator, Optional

from ..registry import Registry, get_namespace
from ..typemap import VOID_POINTER, alias_name, is_pointer_type, mojo_type, type_aliases
from ..types import GLBinding, GLCommand, GLEnum

INDENT = "    "

# Mojo keywords and builtins a registry parameter name can collide with
RESERVED_WORDS = frozenset(
    {
        "alias", "and", "as", "assert", "async", "await", "borrowed", "break",
        "class", "comptime", "continue", "def", "deinit", "del", "elif", "else",
        "except", "finally", "fn", "for", "from", "global", "if", "import",
        "in", "inout", "is", "lambda", "mut", "nonlocal", "not", "or", "out",
        "owned", "pass", "raise", "raises", "read", "ref", "return", "self",
        "struct", "trait", "try", "type", "var", "while", "with", "yield",
    }
)


def symbol_name(namespace: str, identifier: str) -> str:
    """External symbol of a command: ``symbol_name("gl", "Clear") == "glClear"``."""
    return get_namespace(namespace).command_prefix + identifier


def binding_identifier(binding: GLBinding) -> str:
    if binding.identifier in RESERVED_WORDS:
        return binding.identifier + "_"
    return binding.identifier


def render_parameters(
    command: GLCommand,
    include_types: bool,
    include_identifiers: bool,
    namespace: str = "gl",
) -> list[str]:
    """Render a command's parameters, one entry per parameter.

    ``(True, True)`` -> ``mask: GLbitfield``, ``(True, False)`` ->
    ``GLbitfield``, ``(False, True)`` -> ``mask``, ``(False, False)`` ->
    ``_param0``.
    """
    rendered = []
    for index, binding in enumerate(command.parameters):
        if include_identifiers:
            ident = binding_identifier(binding)
        else:
            ident = f"_param{index}"

        if not include_types:
            rendered.append(ident)
            continue

        ty = mojo_type(binding.type_name, namespace, command.identifier)
        rendered.append(f"{ident}: {ty}" if include_identifiers else ty)
    return rendered


def render_return(command: GLCommand, namespace: str = "gl") -> str:
    return mojo_type(command.return_binding.type_name, namespace, command.identifier)


def render_enum(enm: GLEnum, enum_type: str, namespace: Optional[str] = None) -> str:
    """Render one constant as a Mojo ``alias``.

    ``TRUE`` and ``FALSE`` always take the boolean type. With a namespace the
    type is checked against its alias table, and values of pointer types
    (``EGL_CAST(EGLContext,0)``) are built through an explicit conversion.
    """
    ident = enm.identifier
    if ident[0].isdigit():
        ident = "_" + ident

    bool_type = get_namespace(namespace).bool_type if namespace else "GLboolean"
    if enm.identifier in ("TRUE", "FALSE"):
        ty = bool_type
    else:
        ty = enm.type_override or enum_type

    value = enm.value
    if namespace is not None:
        rendered = mojo_type(ty, namespace, enm.identifier)
        if is_pointer_type(ty, namespace):
            value = render_pointer_value(rendered, value)
        ty = rendered

    return f"alias {ident}: {ty} = {value}"


def render_pointer_value(ty: str, value: str) -> str:
    """``EGLContext()`` for a null handle, ``EGLContext(address=-1)`` otherwise."""
    if value in ("0", "0x0", "NULL"):
        return f"{ty}()"
    return f"{ty}(address={value})"


def fn_type(command: GLCommand, namespace: str) -> str:
    params = ", ".join(render_parameters(command, True, False, namespace))
    return f"fn ({params}) -> {render_return(command, namespace)}"


def struct_name(namespace: str) -> str:
    return get_namespace(namespace).struct_name


def describe_selection(registry: Registry) -> str:
    selection = registry.selection
    if selection is None:
        return f"{registry.namespace()} (full registry)"
    text = f"{selection.api} {selection.version} {selection.profile}"
    if selection.extensions:
        text += " + " + ", ".join(selection.extensions)
    return text


def render_header(registry: Registry, generator: str, imports: list[str]) -> str:
    lines = [
        "# AUTOGENERATED. DO NOT EDIT.",
        f"# Generated by glbindgen for {describe_selection(registry)}",
        f"# Layout: {generator}",
        "",
    ]
    lines.extend(imports)
    return "\n".join(lines) + "\n"


def render_type_aliases(registry: Registry) -> str:
    lines = ["# Type aliases"]
    for alias in type_aliases(registry.namespace()):
        lines.append(f"alias {alias_name(alias.name)} = {alias.target}")
    return "\n".join(lines) + "\n"


def render_enums(registry: Registry) -> str:
    info = registry.namespace_info()
    lines = ["# Constants"]
    for enm in registry.enums():
        lines.append(render_enum(enm, info.enum_type, info.name))
    return "\n".join(lines) + "\n"


def render_docstring(command: GLCommand, indent: str) -> list[str]:
    if command.is_safe:
        return []
    return [f'{indent}"""Raw pointer arguments are passed through unchecked."""']


def render_external_call(command: GLCommand, namespace: str) -> str:
    """``external_call["glClear", NoneType](mask)`` for a command."""
    args = ", ".join(render_parameters(command, False, True, namespace))
    ret = render_return(command, namespace)
    return f'external_call["{symbol_name(namespace, command.identifier)}", {ret}]({args})'


@dataclass(frozen=True)
class FnSlot:
    """One loadable function pointer of the emitted bindings."""

    index: int
    command: GLCommand
    symbol: str  # "glClear"
    fn_alias: str  # "ClearFn"
    fn_type: str  # "fn (GLbitfield) -> NoneType"
    failing: str  # "_failing_Clear"

    @property
    def identifier(self) -> str:
        return self.command.identifier


class BindingTable:
    """Indexed slot plan for the dynamically loaded layouts.

    Every slot starts on its failing stub and is switched to the resolved
    address by the emitted load code; nothing here holds runtime state.
    """

    def __init__(self, registry: Registry) -> None:
        namespace = registry.namespace()
        self.namespace = namespace
        self.slots = tuple(
            FnSlot(
                index=index,
                command=cmd,
                symbol=symbol_name(namespace, cmd.identifier),
                fn_alias=f"{cmd.identifier}Fn",
                fn_type=fn_type(cmd, namespace),
                failing=f"_failing_{cmd.identifier}",
            )
            for index, cmd in enumerate(registry.commands())
        )

    def __iter__(self) -> Iterator[FnSlot]:
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def render_fn_aliases(self) -> str:
        lines = ["# Function pointer types"]
        for slot in self.slots:
            lines.append(f"alias {slot.fn_alias} = {slot.fn_type}")
        return "\n".join(lines) + "\n"

    def render_failing_fns(self) -> str:
        """Stubs that abort when a slot is called before it is loaded."""
        lines = ["# Placeholders for functions that were not loaded"]
        for slot in self.slots:
            params = ", ".join(render_parameters(slot.command, True, True, self.namespace))
            ret = render_return(slot.command, self.namespace)
            lines.append("")
            lines.append(f"fn {slot.failing}({params}) -> {ret}:")
            lines.append(f'{INDENT}return abort[{ret}]("{slot.symbol} was not loaded")')
        return "\n".join(lines) + "\n"


# Resolver handed to the loaders, e.g. a wrapper around glXGetProcAddress
PROC_LOADER = "ProcLoader"
PROC_LOADER_ALIAS = f"alias {PROC_LOADER} = fn (String) -> {VOID_POINTER}"

# Both ways a loader can be called: (parameter, type)
LOAD_SOURCES = (("loadfn", PROC_LOADER), ("lib", "DLHandle"))

LOADER_IMPORTS = ["from memory import UnsafePointer", "from os import abort", "from sys import DLHandle"]

FNPTR_STRUCT = f'''{PROC_LOADER_ALIAS}


@value
struct FnPtr[F: AnyTrivialRegType]:
    """A function pointer and whether it was resolved."""

    var f: F
    var is_loaded: Bool


fn _load_fn[F: AnyTrivialRegType](loadfn: {PROC_LOADER}, symbol: String, failing: F) -> FnPtr[F]:
    var address = loadfn(symbol)
    if not address:
        return FnPtr[F](failing, False)
    return FnPtr[F](UnsafePointer(to=address).bitcast[F]()[], True)


fn _load_fn[F: AnyTrivialRegType](lib: DLHandle, symbol: String, failing: F) -> FnPtr[F]:
    if lib.check_symbol(symbol):
        return FnPtr[F](lib.get_function[F](symbol), True)
    return FnPtr[F](failing, False)
'''

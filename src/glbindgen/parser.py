"""Read a Khronos registry XML document into a raw Registry."""

import re
import xml.etree.ElementTree as ET
from collections import defaultdict
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from .errors import MalformedRecordError
from .registry import Namespace, Registry, get_namespace
from .types import APIVersion, GLBinding, GLCommand, GLEnum, Removal, parse_version

# <enum type="..."> suffix -> alias name
ENUM_TYPE_SUFFIXES = {
    "gl": {"u": "GLuint", "ull": "GLuint64"},
    "gles1": {"u": "GLuint", "ull": "GLuint64"},
    "gles2": {"u": "GLuint", "ull": "GLuint64"},
    "glx": {"u": "GLuint", "ull": "GLuint64"},
    "wgl": {"u": "GLuint", "ull": "GLuint64"},
    "egl": {"u": "EGLint", "ull": "EGLuint64KHR"},
}

_EGL_CAST_RE = re.compile(r"^EGL_CAST\(\s*(\w+)\s*,\s*(.+?)\s*\)$")
_C_CAST_RE = re.compile(r"^\(\(\s*(\w+)\s*\)\s*(.+?)\s*\)$")


def load_gl_registry(xml_path: Union[str, Path]) -> ET.Element:
    """Load and parse a registry XML file."""
    tree = ET.parse(xml_path)
    return tree.getroot()


def load_registry(xml_path: Union[str, Path], namespace: str) -> Registry:
    return parse_registry(load_gl_registry(xml_path), namespace)


def _strip_prefix(name: str, prefix: str) -> str:
    if name.startswith(prefix) and len(name) > len(prefix):
        return name[len(prefix):]
    return name


def _api_matches(api: Optional[str], ns: Namespace) -> bool:
    if api is None:
        return True
    apis = api.split("|")
    return ns.name in apis or (ns.name == "gl" and "glcore" in apis)


def _type_text(elem: ET.Element) -> str:
    """The C type of a <proto> or <param>: all text except the <name>.

    Array suffixes after the name (``m[16]``) are kept so they count as
    indirection.
    """
    parts = [elem.text or ""]
    for child in elem:
        if child.tag == "name":
            tail = (child.tail or "").strip()
            if tail.startswith("["):
                parts.append(" " + tail)
            break
        parts.append(child.text or "")
        parts.append(child.tail or "")
    return " ".join("".join(parts).split())


def parse_enum_value(value: str, type_attr: Optional[str], ns: Namespace) -> tuple[str, Optional[str]]:
    """Return the literal text and the alias-name override of an enum value."""
    for pattern in (_EGL_CAST_RE, _C_CAST_RE):
        match = pattern.match(value)
        if match:
            return match.group(2), match.group(1)
    if type_attr:
        return value, ENUM_TYPE_SUFFIXES[ns.name].get(type_attr)
    return value, None


def parse_enums(root: ET.Element, ns: Namespace) -> dict[str, GLEnum]:
    """Parse enum definitions from the registry, keyed by registry name."""
    enums: dict[str, GLEnum] = {}
    for enums_group in root.findall("enums"):
        group_name = enums_group.get("group")

        for enum_elem in enums_group.findall("enum"):
            if not _api_matches(enum_elem.get("api"), ns):
                continue
            name = enum_elem.get("name")
            value_str = enum_elem.get("value")
            if not name:
                raise MalformedRecordError(value_str or "<enum>", "name")
            if value_str is None:
                raise MalformedRecordError(name, "value")

            value, type_override = parse_enum_value(value_str, enum_elem.get("type"), ns)
            enums.setdefault(
                name,
                GLEnum(
                    identifier=_strip_prefix(name, ns.enum_prefix),
                    value=value,
                    type_override=type_override,
                    group=enum_elem.get("group", group_name),
                ),
            )
    return enums


def parse_param(param_elem: ET.Element, command: str) -> GLBinding:
    """Parse a function parameter."""
    name_elem = param_elem.find("name")
    if name_elem is None or not name_elem.text:
        raise MalformedRecordError(command, "param name")

    type_name = _type_text(param_elem)
    if not type_name:
        raise MalformedRecordError(f"{command}.{name_elem.text}", "type")

    return GLBinding(
        identifier=name_elem.text,
        type_name=type_name,
        group=param_elem.get("group"),
        length=param_elem.get("len"),
    )


def parse_commands(root: ET.Element, ns: Namespace) -> dict[str, GLCommand]:
    """Parse command definitions from the registry, keyed by registry name."""
    commands: dict[str, GLCommand] = {}
    for commands_group in root.findall("commands"):
        for command_elem in commands_group.findall("command"):
            if not _api_matches(command_elem.get("api"), ns):
                continue
            proto_elem = command_elem.find("proto")
            if proto_elem is None:
                raise MalformedRecordError("<command>", "proto")
            name_elem = proto_elem.find("name")
            if name_elem is None or not name_elem.text:
                raise MalformedRecordError("<command>", "name")
            cmd_name = name_elem.text

            return_type = _type_text(proto_elem)
            if not return_type:
                raise MalformedRecordError(cmd_name, "return")

            params = tuple(
                parse_param(param_elem, cmd_name)
                for param_elem in command_elem.findall("param")
                if _api_matches(param_elem.get("api"), ns)
            )

            alias_elem = command_elem.find("alias")
            alias = None
            if alias_elem is not None and alias_elem.get("name"):
                alias = _strip_prefix(alias_elem.get("name"), ns.command_prefix)

            is_safe = "*" not in return_type and not any(p.is_pointer for p in params)
            commands.setdefault(
                cmd_name,
                GLCommand(
                    identifier=_strip_prefix(cmd_name, ns.command_prefix),
                    return_binding=GLBinding("return", return_type),
                    parameters=params,
                    is_safe=is_safe,
                    alias=alias,
                ),
            )
    return commands


class _RecordCollector:
    """Accumulates gated record copies in document order."""

    def __init__(self, enums: dict[str, GLEnum], commands: dict[str, GLCommand]) -> None:
        self.enum_defs = enums
        self.command_defs = commands
        self.enums: list[tuple[str, GLEnum]] = []
        self.commands: list[tuple[str, GLCommand]] = []
        self.removals: dict[str, list[Removal]] = defaultdict(list)
        self.referenced: set[str] = set()

    def require(
        self,
        block: ET.Element,
        *,
        version: Optional[APIVersion] = None,
        extension: Optional[str] = None,
    ) -> None:
        profile = block.get("profile")
        for entry in block:
            name = entry.get("name")
            if not name:
                continue
            if entry.tag == "enum":
                definition = self.enum_defs.get(name)
                target = self.enums
            elif entry.tag == "command":
                definition = self.command_defs.get(name)
                target = self.commands
            else:
                continue
            # References to definitions reserved for another api are dropped
            if definition is None:
                continue
            self.referenced.add(name)
            target.append(
                (
                    name,
                    replace(definition, introduced_in=version, extension=extension, profile=profile),
                )
            )

    def remove(self, block: ET.Element, version: APIVersion) -> None:
        removal = Removal(version, block.get("profile"))
        for entry in block:
            name = entry.get("name")
            if name and entry.tag in ("enum", "command"):
                self.removals[name].append(removal)

    def _finish(self, records, definitions):
        finished = [
            replace(record, removed_in=tuple(self.removals.get(name, ())))
            for name, record in records
        ]
        finished.extend(
            definition
            for name, definition in definitions.items()
            if name not in self.referenced
        )
        return finished

    def build(self, ns: Namespace, extension_names: list[str]) -> Registry:
        return Registry(
            ns.name,
            self._finish(self.enums, self.enum_defs),
            self._finish(self.commands, self.command_defs),
            extension_names,
        )


def parse_feature(feature_elem: ET.Element, ns: Namespace, collector: _RecordCollector) -> None:
    number = feature_elem.get("number")
    if not number:
        raise MalformedRecordError(feature_elem.get("name", "<feature>"), "number")
    version = parse_version(number)

    for block in feature_elem:
        if not _api_matches(block.get("api"), ns):
            continue
        if block.tag == "require":
            collector.require(block, version=version)
        elif block.tag == "remove":
            collector.remove(block, version)


def parse_extension(extension_elem: ET.Element, ns: Namespace, collector: _RecordCollector) -> Optional[str]:
    """Collect one <extension>; returns its name when it applies to ``ns``."""
    name = extension_elem.get("name")
    if not name:
        raise MalformedRecordError("<extension>", "name")
    if not _api_matches(extension_elem.get("supported", ""), ns):
        return None

    for block in extension_elem.findall("require"):
        if _api_matches(block.get("api"), ns):
            collector.require(block, extension=name)
    return name


def parse_registry(root: ET.Element, namespace: str) -> Registry:
    """Build the raw registry for ``namespace`` from a parsed document.

    Each ``<require>`` entry yields one record copy carrying the version or
    extension that introduced it; ``<remove>`` entries are attached to every
    copy of the named definition. Definitions no block requires come last.
    """
    ns = get_namespace(namespace)
    collector = _RecordCollector(parse_enums(root, ns), parse_commands(root, ns))
    extension_names: list[str] = []

    for elem in root:
        if elem.tag == "feature":
            if elem.get("api") == ns.name:
                parse_feature(elem, ns, collector)
        elif elem.tag == "extensions":
            for extension_elem in elem.findall("extension"):
                name = parse_extension(extension_elem, ns, collector)
                if name is not None:
                    extension_names.append(name)

    return collector.build(ns, extension_names)

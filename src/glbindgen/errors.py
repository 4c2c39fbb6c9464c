"""Error kinds raised while reading, resolving and emitting a registry."""

from typing import Iterable, Optional


class BindgenError(Exception):
    """Base class for every fatal generation error."""

    code = "BINDGEN_ERROR"

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion


class MalformedRecordError(BindgenError):
    """A registry record is missing a required field."""

    code = "MALFORMED_RECORD"

    def __init__(self, record: str, field: str):
        super().__init__(
            f"Malformed registry record {record!r}: missing {field!r}",
            "Check the registry XML for the declaration named above.",
        )
        self.record = record
        self.field = field


class UnknownTypeError(BindgenError):
    """A binding, return or enum type has no entry in the type-alias table."""

    code = "UNKNOWN_TYPE"

    def __init__(self, type_name: str, owner: str):
        super().__init__(
            f"Unknown type {type_name!r} referenced by {owner!r}",
            "Add the type to the alias table for this namespace.",
        )
        self.type_name = type_name
        self.owner = owner


class SelectionError(BindgenError):
    """An api, profile, version or generator name was not recognised."""

    code = "INVALID_SELECTION"

    def __init__(self, field: str, value: str, accepted: Iterable[str]):
        self.accepted = tuple(accepted)
        super().__init__(
            f"Unknown {field} {value!r}",
            f"Use one of: {', '.join(self.accepted)}.",
        )
        self.field = field
        self.value = value


class UnknownExtensionError(BindgenError):
    """Requested extensions are absent from the registry (strict mode only)."""

    code = "UNKNOWN_EXTENSION"

    def __init__(self, names: Iterable[str], namespace: str):
        self.names = tuple(names)
        super().__init__(
            f"Extensions not declared for {namespace}: {', '.join(self.names)}",
            "Drop --strict-extensions to ignore unknown extension names.",
        )
        self.namespace = namespace

"""Selection of the enums and commands that apply to one API request."""

from dataclasses import dataclass
from typing import Optional, TypeVar, Union

from .errors import SelectionError, UnknownExtensionError
from .registry import DEFAULT_NAMESPACE, Registry, get_namespace
from .types import APIVersion, GLCommand, GLEnum, parse_version

PROFILES = ("core", "compatibility")
DEFAULT_PROFILE = "core"
DEFAULT_VERSION = "1.0"

Record = Union[GLEnum, GLCommand]
RecordT = TypeVar("RecordT", GLEnum, GLCommand)


@dataclass(frozen=True)
class Filter:
    """What to generate: api, version, profile and extra extensions.

    ``strict_extensions`` turns an extension name the document does not
    declare into an error instead of a no-op.
    """

    api: str = DEFAULT_NAMESPACE
    version: str = DEFAULT_VERSION
    profile: str = DEFAULT_PROFILE
    extensions: tuple[str, ...] = ()
    strict_extensions: bool = False

    def __post_init__(self) -> None:
        # Lists from argparse are accepted but stored as a tuple
        object.__setattr__(self, "extensions", tuple(self.extensions))
        get_namespace(self.api)
        if self.profile not in PROFILES:
            raise SelectionError("profile", self.profile, PROFILES)
        parse_version(self.version)

    @property
    def parsed_version(self) -> APIVersion:
        return parse_version(self.version)


def dedup(records: tuple[RecordT, ...]) -> tuple[RecordT, ...]:
    """Keep the first record for each identifier, preserving order."""
    seen: set[str] = set()
    kept = []
    for record in records:
        if record.identifier in seen:
            continue
        seen.add(record.identifier)
        kept.append(record)
    return tuple(kept)


def unknown_extensions(raw: Registry, filt: Filter) -> tuple[str, ...]:
    """Requested extension names the registry does not declare."""
    declared = set(raw.extensions())
    return tuple(name for name in dict.fromkeys(filt.extensions) if name not in declared)


def _profile_admits(qualifier: Optional[str], profile: str) -> bool:
    # compatibility is a superset of core; qualifiers like gles1 "common" never restrict
    if qualifier is None or qualifier not in PROFILES:
        return True
    return profile == "compatibility" or qualifier == profile


def _is_removed(record: Record, version: APIVersion, profile: str) -> bool:
    for removal in record.removed_in:
        if removal.version > version:
            continue
        if removal.profile is None:
            return True
        if profile == "core":
            return True
    return False


def is_selected(record: Record, filt: Filter, version: APIVersion) -> bool:
    """Whether ``record`` belongs in the output for ``filt``."""
    if not _profile_admits(record.profile, filt.profile):
        return False
    if record.extension is not None:
        return record.extension in filt.extensions
    if record.introduced_in is None or record.introduced_in > version:
        return False
    return not _is_removed(record, version, filt.profile)


def resolve(raw: Registry, filt: Optional[Filter]) -> Registry:
    """Compute the resolved registry for ``filt``.

    With no filter every record is kept (full mode). Unknown extension names
    contribute nothing unless ``filt.strict_extensions`` is set.
    """
    if filt is None:
        enums = raw.enums()
        commands = raw.commands()
    else:
        if filt.api != raw.namespace():
            raise SelectionError("api", filt.api, [raw.namespace()])
        missing = unknown_extensions(raw, filt)
        if missing and filt.strict_extensions:
            raise UnknownExtensionError(missing, raw.namespace())

        version = filt.parsed_version
        enums = tuple(e for e in raw.enums() if is_selected(e, filt, version))
        commands = tuple(c for c in raw.commands() if is_selected(c, filt, version))

    return Registry(
        raw.namespace(),
        dedup(enums),
        dedup(commands),
        raw.extensions(),
        resolved=True,
        selection=filt,
    )

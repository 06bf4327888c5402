"""Core cloudseed data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, Union

CLOUD_CONFIG = "text/cloud-config"
SHELLSCRIPT = "text/x-shellscript"
DEFAULT_CONTENT_TYPE = CLOUD_CONFIG
NOCLOUD_MOUNT_TARGET = "/var/lib/cloud/seed/nocloud"


class Unset(Enum):
    """Marker for a field the user never touched."""

    UNSET = "unset"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = Unset.UNSET

MaybeStr = Union[str, None, Unset]


class DocumentKind(Enum):
    """The four cloud-init documents, valued by their canonical filename."""

    USER_DATA = "user-data"
    META_DATA = "meta-data"
    VENDOR_DATA = "vendor-data"
    NETWORK_CONFIG = "network-config"

    @property
    def filename(self) -> str:
        return self.value

    @property
    def field_name(self) -> str:
        return self.value.replace("-", "_")


@dataclass(slots=True)
class RawDocumentSpec:
    """Document settings as bound from configuration, before defaults."""

    content_type: MaybeStr = UNSET
    inline: MaybeStr = UNSET
    path: MaybeStr = UNSET


@dataclass(slots=True)
class RawCloudInitConfig:
    user_data: RawDocumentSpec = field(default_factory=RawDocumentSpec)
    meta_data: RawDocumentSpec = field(default_factory=RawDocumentSpec)
    vendor_data: RawDocumentSpec = field(default_factory=RawDocumentSpec)
    network_config: RawDocumentSpec = field(default_factory=RawDocumentSpec)

    def spec(self, kind: DocumentKind) -> RawDocumentSpec:
        return getattr(self, kind.field_name)


@dataclass(frozen=True, slots=True)
class DocumentSpec:
    """Resolved settings for a single cloud-init document."""

    content_type: str | None = DEFAULT_CONTENT_TYPE
    inline: str | None = None
    path: str | None = None

    @property
    def active(self) -> bool:
        return bool(self.inline) or bool(self.path)


@dataclass(frozen=True, slots=True)
class CloudInitConfig:
    """Resolved document specs, one per DocumentKind."""

    user_data: DocumentSpec = DocumentSpec()
    meta_data: DocumentSpec = DocumentSpec()
    vendor_data: DocumentSpec = DocumentSpec()
    network_config: DocumentSpec = DocumentSpec()

    def spec(self, kind: DocumentKind) -> DocumentSpec:
        """Resolved spec for ``kind``."""
        return getattr(self, kind.field_name)

    def items(self) -> Iterator[tuple[DocumentKind, DocumentSpec]]:
        """Yield every kind with its spec in declaration order."""
        for kind in DocumentKind:
            yield kind, self.spec(kind)

    def active(self) -> list[tuple[DocumentKind, DocumentSpec]]:
        """Kinds whose spec has inline content or a path."""
        return [(kind, spec) for kind, spec in self.items() if spec.active]


@dataclass(frozen=True, slots=True)
class Identity:
    name: str
    hostname: str | None = None

    @property
    def effective_hostname(self) -> str:
        return self.hostname or self.name


@dataclass(slots=True)
class MaterializedSet:
    """Documents written to a seed directory and where to mount it."""

    written: list[tuple[str, str]] = field(default_factory=list)
    generated_meta_data: bool = False
    mount_source: Path | None = None
    mount_target: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.written

    @property
    def filenames(self) -> list[str]:
        return [name for name, _ in self.written]

    @property
    def mount_descriptor(self) -> str | None:
        if self.mount_source is None or self.mount_target is None:
            return None
        return f"{self.mount_source}:{self.mount_target}:ro"

"""Application configuration defaults and cloud-init config binding."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from cloudseed.errors import ConfigError
from cloudseed.models import (
    DEFAULT_CONTENT_TYPE,
    NOCLOUD_MOUNT_TARGET,
    UNSET,
    CloudInitConfig,
    DocumentKind,
    DocumentSpec,
    MaybeStr,
    RawCloudInitConfig,
    RawDocumentSpec,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_STATE_DIR = Path(".vagrant") / "cloudinit"
DEFAULT_PROVIDER = "docker"

_SPEC_KEYS = frozenset({"content_type", "inline", "path"})


@dataclass(slots=True)
class AppConfig:
    state_dir: Path = DEFAULT_STATE_DIR
    provider: str = DEFAULT_PROVIDER
    mount_target: str = NOCLOUD_MOUNT_TARGET

    def resolve_state_dir(self, base_dir: Path | None = None) -> Path:
        if Path(self.state_dir).is_absolute() or base_dir is None:
            return Path(self.state_dir)
        return base_dir / self.state_dir

    def seed_dir(self, root_path: Path, name: str) -> Path:
        """Per-machine seed directory under the project root."""
        return self.resolve_state_dir(root_path) / name


def _resolve_value(value: MaybeStr) -> str | None:
    return None if value is UNSET else value


def _resolve_spec(raw: RawDocumentSpec) -> DocumentSpec:
    content_type = DEFAULT_CONTENT_TYPE if raw.content_type is UNSET else raw.content_type
    return DocumentSpec(
        content_type=content_type,
        inline=_resolve_value(raw.inline),
        path=_resolve_value(raw.path),
    )


def resolve(raw: RawCloudInitConfig | CloudInitConfig) -> CloudInitConfig:
    """Fill defaults for every document the user left unset.

    Never fails and never mutates ``raw``. An already resolved config is
    returned as-is.
    """
    if isinstance(raw, CloudInitConfig):
        return raw
    return CloudInitConfig(
        **{kind.field_name: _resolve_spec(raw.spec(kind)) for kind in DocumentKind}
    )


def _section_name(key: Any) -> str:
    if not isinstance(key, str):
        raise ConfigError(f"Invalid section name: {key!r}")
    name = key.replace("-", "_")
    if name not in {kind.field_name for kind in DocumentKind}:
        raise ConfigError(f"Unknown cloud-init section: {key}")
    return name


def _parse_spec(section: str, data: Any) -> RawDocumentSpec:
    if data is None:
        return RawDocumentSpec()
    if not isinstance(data, Mapping):
        raise ConfigError(f"Section '{section}' must be a mapping")

    spec = RawDocumentSpec()
    for key, value in data.items():
        if key not in _SPEC_KEYS:
            raise ConfigError(f"Unknown key '{key}' in section '{section}'")
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"'{section}.{key}' must be a string or null")
        setattr(spec, key, value)
    return spec


def parse_raw_config(data: Any) -> RawCloudInitConfig:
    """Bind a parsed YAML document onto a raw config."""
    config = RawCloudInitConfig()
    if data is None:
        return config
    if not isinstance(data, Mapping):
        raise ConfigError("Cloud-init configuration must be a mapping")

    for key, value in data.items():
        name = _section_name(key)
        setattr(config, name, _parse_spec(name, value))
    return config


def load_raw_config(path: Path) -> RawCloudInitConfig:
    """Load a cloud-init configuration file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    LOGGER.debug("Loaded cloud-init configuration from %s", path)
    return parse_raw_config(data)

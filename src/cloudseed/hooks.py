"""Lifecycle hooks wiring the seed engine into a machine's up/halt/destroy."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from cloudseed.config import AppConfig
from cloudseed.errors import CleanupError
from cloudseed.models import CloudInitConfig, DocumentKind, Identity, MaterializedSet
from cloudseed.seed.materializer import cleanup, prepare

LOGGER = logging.getLogger(__name__)


class UISink(Protocol):
    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...


@dataclass(slots=True)
class MachineContext:
    """Snapshot of the machine a hook runs for."""

    name: str
    provider: str
    root_path: Path
    hostname: str | None = None
    volumes: list[str] = field(default_factory=list)

    @property
    def identity(self) -> Identity:
        return Identity(name=self.name, hostname=self.hostname)


def _applies(machine: MachineContext, app_config: AppConfig) -> bool:
    if machine.provider != app_config.provider:
        LOGGER.debug("Skipping %s: provider %s", machine.name, machine.provider)
        return False
    return True


def before_create(
    machine: MachineContext,
    config: CloudInitConfig,
    ui: UISink,
    app_config: AppConfig | None = None,
) -> MaterializedSet:
    """Prepare the seed directory and register its mount on ``machine``.

    Errors from the engine propagate so the caller can abort creation.
    """
    app_config = app_config or AppConfig()
    if not _applies(machine, app_config) or not config.active():
        return MaterializedSet()

    ui.info("Setting up cloud-init NoCloud datasource for container")
    seed_dir = app_config.seed_dir(Path(machine.root_path), machine.name)
    result = prepare(
        config,
        machine.identity,
        seed_dir,
        Path(machine.root_path),
        mount_target=app_config.mount_target,
    )

    for filename in result.filenames:
        if filename == DocumentKind.META_DATA.filename and result.generated_meta_data:
            ui.info(f"  Created {filename} (auto-generated)")
        else:
            ui.info(f"  Created {filename}")

    machine.volumes.append(result.mount_descriptor)
    ui.success(f"Cloud-init files prepared at {result.mount_source}")
    ui.info(f"Files will be mounted at {result.mount_target} in container")
    return result


def after_destroy(
    machine: MachineContext, ui: UISink, app_config: AppConfig | None = None
) -> None:
    """Remove the machine's seed directory; failures are only logged."""
    app_config = app_config or AppConfig()
    if not _applies(machine, app_config):
        return

    seed_dir = app_config.seed_dir(Path(machine.root_path), machine.name)
    try:
        removed = cleanup(seed_dir)
    except CleanupError as exc:
        LOGGER.warning("%s", exc)
        return
    if removed:
        ui.info("Cleaned up cloud-init files")


after_halt = after_destroy

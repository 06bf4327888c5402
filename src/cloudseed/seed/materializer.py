"""NoCloud seed directory materialization."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from cloudseed.errors import CleanupError, DirectoryCreateError, SeedWriteError
from cloudseed.models import (
    NOCLOUD_MOUNT_TARGET,
    CloudInitConfig,
    DocumentKind,
    DocumentSpec,
    Identity,
    MaterializedSet,
)
from cloudseed.utils.files import read_source, resolve_source_path
from cloudseed.utils.headers import normalize_header

LOGGER = logging.getLogger(__name__)


def fallback_meta_data(identity: Identity) -> str:
    """Minimal meta-data NoCloud needs to activate."""
    return f"instance-id: {identity.name}\nlocal-hostname: {identity.effective_hostname}\n"


def _document_content(kind: DocumentKind, spec: DocumentSpec, base_dir: Path) -> str:
    if spec.path:
        if spec.inline:
            # Path takes precedence; both being set is likely a mistake.
            LOGGER.warning("%s has both path and inline content; using path", kind.filename)
        source = resolve_source_path(spec.path, base_dir)
        LOGGER.debug("Reading %s from %s", kind.filename, source)
        return read_source(source)
    return spec.inline or ""


def _write(work_dir: Path, filename: str, content: str) -> None:
    target = work_dir / filename
    try:
        with target.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as exc:
        raise SeedWriteError(f"Cannot write {target}: {exc}") from exc
    LOGGER.info("Created %s", filename)


def prepare(
    config: CloudInitConfig,
    identity: Identity,
    work_dir: Path,
    base_dir: Path,
    *,
    mount_target: str = NOCLOUD_MOUNT_TARGET,
) -> MaterializedSet:
    """Write the configured documents into ``work_dir``.

    Returns an empty set without touching the filesystem when no document is
    configured. Otherwise every active document is normalized and written,
    ``meta-data`` is synthesized if missing, and the returned set carries the
    read-only mount the caller should add to the container.
    """
    active = config.active()
    if not active:
        LOGGER.debug("No cloud-init documents configured for %s", identity.name)
        return MaterializedSet()

    work_dir = Path(work_dir)
    try:
        work_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(f"Cannot create seed directory {work_dir}: {exc}") from exc

    result = MaterializedSet()
    has_meta_data = False
    for kind, spec in active:
        content = normalize_header(_document_content(kind, spec, Path(base_dir)), spec.content_type)
        _write(work_dir, kind.filename, content)
        result.written.append((kind.filename, content))
        if kind is DocumentKind.META_DATA:
            has_meta_data = True

    if not has_meta_data:
        content = fallback_meta_data(identity)
        _write(work_dir, DocumentKind.META_DATA.filename, content)
        result.written.append((DocumentKind.META_DATA.filename, content))
        result.generated_meta_data = True

    result.mount_source = work_dir
    result.mount_target = mount_target
    return result


def cleanup(work_dir: Path) -> bool:
    """Remove a seed directory. Returns whether anything was removed."""
    work_dir = Path(work_dir)
    if not work_dir.exists() and not work_dir.is_symlink():
        return False
    try:
        if work_dir.is_symlink() or work_dir.is_file():
            work_dir.unlink()
        else:
            shutil.rmtree(work_dir)
    except OSError as exc:
        raise CleanupError(f"Cannot remove seed directory {work_dir}: {exc}") from exc
    LOGGER.info("Removed seed directory %s", work_dir)
    return True

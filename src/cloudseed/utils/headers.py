"""Leading-marker normalization for cloud-init documents."""

from __future__ import annotations

from cloudseed.models import CLOUD_CONFIG, SHELLSCRIPT

CLOUD_CONFIG_MARKER = "#cloud-config"
SHEBANG_PREFIX = "#!"
DEFAULT_SHEBANG = "#!/bin/bash"


def normalize_header(content: str, content_type: str | None) -> str:
    """Prepend the marker NoCloud dispatches on, unless already present.

    Content types other than cloud-config and shell scripts pass through.
    """
    if content_type == CLOUD_CONFIG and not content.startswith(CLOUD_CONFIG_MARKER):
        return f"{CLOUD_CONFIG_MARKER}\n{content}"
    if content_type == SHELLSCRIPT and not content.startswith(SHEBANG_PREFIX):
        return f"{DEFAULT_SHEBANG}\n{content}"
    return content

"""Environment utilities for resolving secret files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Sequence

logger = logging.getLogger(__name__)

# Only settings groups that may carry secrets are resolved.
SECRET_PREFIXES: Sequence[str] = ("HASS_", "DEVICE_")


def load_secret_file_variables(
    prefixes: Sequence[str] = SECRET_PREFIXES,
) -> List[str]:
    """
    Resolve ``<KEY>_FILE`` variables following Docker secret conventions.

    ``HASS_TOKEN_FILE=/run/secrets/hass_token`` exposes the file content as
    ``HASS_TOKEN`` unless ``HASS_TOKEN`` is already set. Unreadable files
    are logged and skipped.

    Returns:
        The target keys that were populated.
    """

    resolved: List[str] = []
    for key, file_path in list(os.environ.items()):
        if not key.endswith("_FILE"):
            continue
        target_key = key[:-5]
        if prefixes and not target_key.startswith(tuple(prefixes)):
            continue
        if os.environ.get(target_key):
            continue
        if not file_path:
            continue
        try:
            value = Path(file_path).read_text(encoding="utf-8").strip()
        except FileNotFoundError as exc:
            logger.warning(
                "env.secret_file.missing",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        except UnicodeDecodeError as exc:
            logger.warning(
                "env.secret_file.decode_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        except OSError as exc:
            logger.warning(
                "env.secret_file.load_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        os.environ[target_key] = value
        resolved.append(target_key)
    return resolved

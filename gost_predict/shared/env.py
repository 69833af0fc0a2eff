"""Docker secret file support for environment based settings."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import MutableMapping, Optional

logger = logging.getLogger(__name__)

SECRET_SUFFIX = "_FILE"


def _read_secret(key: str, path: str) -> Optional[str]:
    context = {"key": key, "path": path}
    try:
        return Path(path).read_text(encoding="utf-8").strip()
    except FileNotFoundError as exc:
        logger.warning("env.secret_file.missing", extra={**context, "error": str(exc)})
    except UnicodeDecodeError as exc:
        logger.warning(
            "env.secret_file.decode_failed", extra={**context, "error": str(exc)}
        )
    except OSError as exc:
        logger.warning(
            "env.secret_file.load_failed", extra={**context, "error": str(exc)}
        )
    return None


def load_secret_file_variables(
    environ: Optional[MutableMapping[str, str]] = None,
) -> None:
    """
    Expose the content of every ``NAME_FILE`` file as ``NAME``.

    For example SENSORTHINGS_PROBE_URL_FILE can carry a probe URL with
    credentials. A variable that is already set keeps its value, and an
    unreadable file is logged and skipped.
    """
    env = os.environ if environ is None else environ

    for key, path in list(env.items()):
        if not key.endswith(SECRET_SUFFIX) or not path:
            continue
        target = key[: -len(SECRET_SUFFIX)]
        if env.get(target):
            continue
        value = _read_secret(key, path)
        if value is not None:
            env[target] = value

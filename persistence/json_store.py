from __future__ import annotations

import json
import logging
import os
import stat
from pathlib import Path
from typing import Any

from .errors import StoreDecodeError, StoreEncodeError, StoreIOError

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


def ensure_file(path: Path, *, mode: int = FILE_MODE) -> bool:
    """
    Create an empty file at `path` if nothing exists there yet.

    Returns True when the file was created. Existing content is left untouched.
    """
    if path.is_file():
        return False
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
        os.close(fd)
        # os.open honours the umask; pin the documented mode.
        os.chmod(path, mode)
    except FileExistsError:
        # Lost a creation race or the path is something other than a regular file.
        if path.is_file():
            return False
        raise StoreIOError(path, "exists and is not a regular file") from None
    except (OSError, ValueError) as e:
        logger.warning("JSON STORE: failed to create %s: %r", path, e)
        raise StoreIOError(path, f"cannot create file: {getattr(e, 'strerror', None) or e}") from e
    return True


def read_json(path: Path) -> Any | None:
    """
    Read JSON from disk.

    Returns None for empty (or whitespace-only) files. Raises StoreIOError when
    the file cannot be read and StoreDecodeError for invalid JSON.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("JSON STORE: failed to read %s: %r", path, e)
        raise StoreIOError(path, f"cannot read file: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise StoreDecodeError(path, f"not valid UTF-8: {e}") from e
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("JSON STORE: invalid JSON in %s: %s", path, e)
        raise StoreDecodeError(path, f"invalid JSON: {e}") from e


def dump_json(path: Path, payload: Any, *, indent: int = 2) -> str:
    try:
        return json.dumps(payload, indent=indent, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as e:
        raise StoreEncodeError(path, f"cannot serialize document: {e}") from e


def atomic_write_json(path: Path, payload: Any, *, indent: int = 2, mode: int | None = None) -> None:
    """
    Replace the whole file with `payload` by writing to a temp file then replacing.

    The payload is serialized before anything on disk is touched. The new file
    keeps the mode of the one it replaces (FILE_MODE when there is none),
    unless `mode` is given.
    """
    text = dump_json(path, payload, indent=indent)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        if mode is None:
            mode = stat.S_IMODE(path.stat().st_mode) if path.is_file() else FILE_MODE
        with tmp_path.open("w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(tmp_path, mode)
        tmp_path.replace(path)
    except OSError as e:
        logger.warning("JSON STORE: failed to write %s: %r", path, e)
        if tmp_path.is_file():
            tmp_path.unlink()
        raise StoreIOError(path, f"cannot write file: {e.strerror or e}") from e

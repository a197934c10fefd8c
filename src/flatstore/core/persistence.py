"""
flatstore Core - Document persistence.

Reading and writing of the whole JSON document. No caching and no locking
here; the TableStore owns both.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from flatstore.config import StoreSettings
from flatstore.exceptions import LoadError, PersistError

logger = logging.getLogger(__name__)


def read_document(path: Path, encoding: str = "utf-8") -> list[Any] | dict[str, Any]:
    """
    Read and parse the document at ``path``.

    Raises:
        LoadError: If the file cannot be read, is not valid JSON (including
            NaN and Infinity), or its root is neither an array nor an object
            of tables.
    """
    try:
        with open(path, "r", encoding=encoding) as f:
            data = json.load(f, parse_constant=_reject_constant)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        raise LoadError(path, str(e)) from e

    if not isinstance(data, (list, dict)):
        raise LoadError(path, f"document root must be an array or object, got {type(data).__name__}")
    return data


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def serialize_document(document: Any, settings: StoreSettings) -> str:
    """Serialize the document with the configured JSON layout."""
    return json.dumps(
        document,
        indent=settings.indent,
        ensure_ascii=settings.ensure_ascii,
        allow_nan=False,
    )


def write_document(path: Path, payload: str, encoding: str = "utf-8", atomic: bool = True) -> None:
    """
    Replace the content of ``path`` with ``payload``.

    With ``atomic`` the payload goes to ``<path>.tmp`` first and is renamed
    over the target, so readers see either the old or the new document.

    Raises:
        PersistError: If the write or the rename fails.
    """
    try:
        if not atomic:
            with open(path, "w", encoding=encoding) as f:
                f.write(payload)
            return

        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding=encoding) as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            tmp_path.replace(path)
        except (OSError, UnicodeError):
            tmp_path.unlink(missing_ok=True)
            raise
    except (OSError, UnicodeError) as e:
        raise PersistError(path, str(e)) from e

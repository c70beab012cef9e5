"""
JSON storage for Library Records.

Each collection (books, readers, loans) lives in its own JSON file holding an
array of entity documents. Files are always rewritten wholesale. A write goes
to a temporary sibling file first and is then moved over the target, so a
crash never leaves one file half-written; the three files are still written
one after the other and are not updated as a set.

Reading distinguishes three outcomes:
1. The file is absent: ``read_documents`` returns None
2. The file is an array: the raw documents are returned untouched
3. Anything else: ``CorruptDocumentError`` is raised
"""

import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from .config import LibraryConfig

logger = logging.getLogger(__name__)

DEFAULT_INDENT = 4


class StorageError(Exception):
    """Base exception for storage operations."""


class CorruptDocumentError(StorageError):
    """Raised when a collection file cannot be decoded as a document array."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class StorageLocations(BaseModel):
    """The three named storage locations used by save and load."""

    books: Path
    readers: Path
    loans: Path

    @classmethod
    def in_directory(cls, directory: Path | str) -> "StorageLocations":
        """Default file names inside ``directory``."""
        base = Path(directory)
        return cls(
            books=base / "books.json",
            readers=base / "readers.json",
            loans=base / "loans.json",
        )

    @classmethod
    def from_config(cls, config: LibraryConfig) -> "StorageLocations":
        return cls(
            books=config.books_path,
            readers=config.readers_path,
            loans=config.loans_path,
        )


def read_documents(path: Path) -> list[Any] | None:
    """
    Load the document array stored at ``path``.

    Args:
        path: Collection file

    Returns:
        The decoded list, or None if the file does not exist

    Raises:
        CorruptDocumentError: If the file cannot be read, is not valid JSON
            or is not an array
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No collection file at %s", path)
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Undecodable collection file %s: %s", path, e)
        raise CorruptDocumentError(path, f"invalid JSON ({e})") from e
    except OSError as e:
        logger.warning("Unreadable collection file %s: %s", path, e)
        raise CorruptDocumentError(path, f"cannot be read ({e})") from e

    if not isinstance(data, list):
        logger.warning("Collection file %s does not hold an array", path)
        raise CorruptDocumentError(path, f"expected an array, found {type(data).__name__}")

    logger.debug("Read %d documents from %s", len(data), path)
    return data


def write_documents(
    path: Path, documents: Iterable[dict[str, Any]], indent: int = DEFAULT_INDENT
) -> None:
    """
    Replace the contents of ``path`` with a JSON array of ``documents``.

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path)
    payload = list(documents)
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=indent)
            f.write("\n")
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.debug("Wrote %d documents to %s", len(payload), path)

"""Whole-document persistence for the catalog.

The catalog lives in one JSON file holding every collection. Every operation
loads the whole file and, when it mutates, writes the whole file back. There
is no locking: two overlapping read-modify-write cycles end with the last
save winning.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Protocol

from uicatalog.catalog.registry import default_document
from uicatalog.errors import StoreIOError

logger = logging.getLogger(__name__)

Document = dict[str, list[dict]]


def _file_mode(path: Path) -> int:
    """Permission bits for a rewritten `path`: its current mode, else the umask default."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class DocumentStore(Protocol):
    def load(self) -> Document: ...

    def save(self, document: Document) -> None: ...


class JsonDocumentStore:
    """Reads and writes the catalog document at `path`."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Document:
        """Parse the catalog file, falling back to an empty document.

        A missing or unparsable file yields a fresh document with every
        collection empty. Any other read failure raises StoreIOError.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info(f"No catalog at {self.path}, starting with an empty document")
            return default_document()
        except OSError as e:
            logger.error(f"Failed to read catalog {self.path}: {e}")
            raise StoreIOError(self.path, f"read failed: {e}") from e

        try:
            document = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Catalog {self.path} is not valid JSON ({e}), starting with an empty document")
            return default_document()

        if not isinstance(document, dict):
            logger.warning(f"Catalog {self.path} does not hold a JSON object, starting with an empty document")
            return default_document()
        return document

    def save(self, document: Document) -> None:
        """Replace the catalog file with `document`.

        The document is written to a sibling temp file and renamed over the
        target, so readers see either the old or the new file.
        """
        text = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            # mkstemp creates 0600 files
            os.chmod(tmp_name, _file_mode(self.path))
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error(f"Failed to write catalog {self.path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreIOError(self.path, f"write failed: {e}") from e


class MemoryDocumentStore:
    """Keeps the document in memory; used where no file should be touched."""

    def __init__(self, document: Document | None = None) -> None:
        self._document = copy.deepcopy(document) if document is not None else default_document()
        self.saves = 0

    def load(self) -> Document:
        return copy.deepcopy(self._document)

    def save(self, document: Document) -> None:
        self._document = copy.deepcopy(document)
        self.saves += 1

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from .errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


def utf8_size(text: str) -> int:
    return len(text.encode("utf-8"))


class Slot:
    """A single opaque text value addressed by a fixed key.

    Subclasses implement _read/_write/_remove; quota checks live here.
    """

    def __init__(self, key: str, quota_bytes: Optional[int] = None) -> None:
        self.key = key
        self.quota_bytes = quota_bytes

    def read(self) -> Optional[str]:
        return self._read()

    def write(self, text: str) -> None:
        size = utf8_size(text)
        if self.quota_bytes is not None and size > self.quota_bytes:
            raise StorageWriteError(
                f"Quota exceeded writing '{self.key}': "
                f"{size} bytes > {self.quota_bytes} bytes"
            )
        self._write(text)

    def remove(self) -> None:
        self._remove()

    def _read(self) -> Optional[str]:
        raise NotImplementedError

    def _write(self, text: str) -> None:
        raise NotImplementedError

    def _remove(self) -> None:
        raise NotImplementedError


class MemorySlot(Slot):
    """In-process slot; several slots may share one backing dict."""

    def __init__(
        self,
        key: str = "ls_notebooks_v1",
        quota_bytes: Optional[int] = None,
        backing: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(key, quota_bytes)
        self.backing: Dict[str, str] = {} if backing is None else backing

    def _read(self) -> Optional[str]:
        return self.backing.get(self.key)

    def _write(self, text: str) -> None:
        self.backing[self.key] = text

    def _remove(self) -> None:
        self.backing.pop(self.key, None)


class FileSlot(Slot):
    """Slot stored as <directory>/<key>.json, replaced atomically on write."""

    def __init__(
        self, directory: Path, key: str, quota_bytes: Optional[int] = None
    ) -> None:
        super().__init__(key, quota_bytes)
        self.directory = Path(directory)

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def _read(self) -> Optional[str]:
        # UnicodeDecodeError propagates: undecodable bytes are corrupt content
        p = self.path
        if not p.exists():
            return None
        try:
            return p.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageReadError(f"Failed to read {p}: {e}") from e

    def _write(self, text: str) -> None:
        p = self.path
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                dir=str(p.parent), prefix=f".{self.key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(tmp, p)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as e:
            raise StorageWriteError(f"Failed to write {p}: {e}") from e
        logger.debug("Wrote %s (%d bytes)", p, utf8_size(text))

    def _remove(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

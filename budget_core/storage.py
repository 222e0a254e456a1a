"""Persistence of ledger tables as plain text files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class LedgerFileStorage:
    """Reads and writes whole ledger tables with crash-safe writes.

    Relative paths are resolved against ``base_path``.
    """

    def __init__(self, base_path: PathLike = ".") -> None:
        self._base_path = Path(base_path)

    def resolve(self, resource: PathLike) -> Path:
        return self._base_path / Path(resource)

    def read(self, resource: PathLike) -> str:
        path = self.resolve(resource)
        if not path.is_file():
            raise StorageUnavailableError(f"Ledger file {path} does not exist")
        try:
            with path.open("r", encoding="utf-8") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageUnavailableError(f"Unable to read from {path}") from exc
        logger.debug("Read %d characters from %s", len(text), path)
        return text

    def write(self, resource: PathLike, text: str) -> Path:
        path = self.resolve(resource)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(text)
                handle.flush()
            # Replace is an atomic move on POSIX.
            temp_path.replace(path)
        except OSError as exc:
            raise StorageUnavailableError(f"Unable to write to {path}") from exc
        logger.info("Saved ledger to %s", path)
        return path

    @property
    def base_path(self) -> Path:
        return self._base_path

"""On-disk JSON documents backing the transaction ledger."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .exceptions import StoreFailure


class JSONStorage:
    """Directory of ledger files, each holding one JSON array of records.

    A write is durable once ``save`` returns: the new array is flushed and
    fsynced to a sibling ``.tmp`` file which then replaces the ledger file.
    """

    def __init__(self, base_path: Path) -> None:
        self._base_path = Path(base_path)
        try:
            self._base_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreFailure(f"Unable to create data directory {self._base_path}") from exc

    def load(self, resource: str) -> List[Dict[str, Any]]:
        """Return the records of a ledger file; a file not yet written is empty."""
        path = self._resource_path(resource)
        if not path.exists():
            return []
        try:
            with path.open("r", encoding="utf-8") as handle:
                records = json.load(handle)
        except json.JSONDecodeError as exc:
            raise StoreFailure(f"Corrupted JSON data in {path}") from exc
        except OSError as exc:
            raise StoreFailure(f"Unable to read ledger file {path}") from exc

        if not isinstance(records, list):
            raise StoreFailure(f"Ledger file {path} must hold a JSON array")
        return records

    def save(self, resource: str, records: Iterable[Dict[str, Any]]) -> None:
        path = self._resource_path(resource)
        staging = path.with_suffix(path.suffix + ".tmp")
        try:
            with staging.open("w", encoding="utf-8") as handle:
                json.dump(list(records), handle, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            staging.replace(path)
        except OSError as exc:
            raise StoreFailure(f"Unable to write ledger file {path}") from exc

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _resource_path(self, resource: str) -> Path:
        return self._base_path / resource

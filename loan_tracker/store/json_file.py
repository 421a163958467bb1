"""JSON file backed record store."""

from __future__ import annotations

import json
import logging
import tempfile
from decimal import InvalidOperation
from pathlib import Path
from typing import Any, Callable

from loan_tracker.config import UNKNOWN_CLIENT_LABEL, LoanTrackerConfig
from loan_tracker.engine.status import validate_status
from loan_tracker.exceptions import InvalidEntityStateError, StorageError
from loan_tracker.serialization import (
    client_from_dict,
    expense_from_dict,
    loan_from_dict,
    to_dict,
)
from loan_tracker.store.memory import LoanBookStore

logger = logging.getLogger(__name__)

# collection -> (loader, id attribute)
LOADERS: dict[str, tuple[Callable[[dict[str, Any]], Any], str]] = {
    "clients": (client_from_dict, "client_id"),
    "loans": (loan_from_dict, "loan_id"),
    "expenses": (expense_from_dict, "expense_id"),
}

# raised by the loaders or the status check on a record that decodes but is unusable
BAD_RECORD_ERRORS = (KeyError, ValueError, TypeError, InvalidOperation, InvalidEntityStateError)


class JsonFileStore(LoanBookStore):
    """Record store persisted as one JSON file per collection.

    Files are read once on construction. After every mutation the whole
    affected collection is rewritten (``clients.json``, ``loans.json``,
    ``expenses.json``), so the files always hold the last written state.
    """

    def __init__(
        self,
        data_dir: str | Path,
        pretty: bool = False,
        unknown_client_label: str = UNKNOWN_CLIENT_LABEL,
    ) -> None:
        """Initialize the store and load existing files.

        Parameters
        ----------
        data_dir : str | Path
            Directory holding the JSON files (created if missing).
        pretty : bool
            Pretty-print JSON output.
        unknown_client_label : str
            Display name for loans whose client is missing.
        """
        super().__init__(unknown_client_label=unknown_client_label)
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._load()

    @classmethod
    def from_config(cls, config: LoanTrackerConfig) -> "JsonFileStore":
        """Create a store from configuration."""
        return cls(
            data_dir=config.storage.data_dir,
            pretty=config.storage.pretty_json,
            unknown_client_label=config.report.unknown_client_label,
        )

    def file_path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def _load(self) -> None:
        for collection, (loader, id_attr) in LOADERS.items():
            records = getattr(self, collection)
            for item in self._read(collection):
                try:
                    record = loader(item)
                    if collection == "loans":
                        validate_status(record)
                except BAD_RECORD_ERRORS as exc:
                    raise StorageError(
                        f"Bad record in {self.file_path(collection)}: {exc!r}"
                    ) from exc
                records[getattr(record, id_attr)] = record
        logger.info("Loaded loan book from %s: %s", self.data_dir, self.summary())

    def _read(self, collection: str) -> list[dict[str, Any]]:
        path = self.file_path(collection)
        if not path.exists():
            return []
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read {path}: {exc}") from exc
        if not isinstance(data, list):
            raise StorageError(f"{path} must hold a JSON list")
        return data

    def _changed(self, collection: str) -> None:
        path = self.file_path(collection)
        data = [to_dict(record) for record in getattr(self, collection).values()]
        # a failed dump must leave the previous file intact
        fd, tmp_name = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{collection}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with open(fd, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
            tmp_path.replace(path)
        except OSError as exc:
            raise StorageError(f"Cannot write {path}: {exc}") from exc
        finally:
            tmp_path.unlink(missing_ok=True)
        logger.debug("Wrote %d %s to %s", len(data), collection, path)

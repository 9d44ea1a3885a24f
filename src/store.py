"""JSON file persistence for the bind record list."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from constants import default_config_path
from model import LoadFailure, PersistedRecord, SaveFailure

log = logging.getLogger(__name__)

# Shipped default: three controller binds
DEFAULT_RECORDS = [
    PersistedRecord(keycode="51", result_type="thumb_lx", result_value=-32768),  # Q: LEFT STICK LEFT
    PersistedRecord(keycode="45", result_type="thumb_lx", result_value=32767),  # E: LEFT STICK RIGHT
    PersistedRecord(keycode="58", result_type="thumb_ry", result_value=32767),  # X: RIGHT STICK UP
]


class BindConfigFile:
    """Reads and writes the record list consumed by the interception engine."""

    def __init__(self, path: Path | None = None):
        self.path = path if path is not None else default_config_path()

    def load_records(self) -> list[PersistedRecord]:
        """Read all records.

        Raises:
            LoadFailure: the file is missing, unreadable, or not a list of
                well-formed records.
        """
        try:
            data = json.loads(self.path.read_text())
        except FileNotFoundError:
            raise LoadFailure(f"{self.path} does not exist") from None
        except OSError as e:
            raise LoadFailure(f"{self.path}: {e.strerror or e}") from e
        except json.JSONDecodeError as e:
            raise LoadFailure(f"{self.path} is not valid JSON ({e})") from e

        if not isinstance(data, list):
            raise LoadFailure(f"{self.path} must contain a JSON array")

        records = []
        for i, item in enumerate(data):
            try:
                records.append(PersistedRecord.from_dict(item))
            except ValueError as e:
                raise LoadFailure(f"record {i}: {e}") from e
        log.info(f"Loaded {len(records)} records from {self.path}")
        return records

    def save_records(self, records: Sequence[PersistedRecord]) -> None:
        """Write all records, replacing the file atomically.

        Raises:
            SaveFailure: the file could not be written. The previous file is
                left as it was.
        """
        text = json.dumps([record.to_dict() for record in records], indent=2)
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".overbind-", suffix=".json", dir=self.path.parent)
            with os.fdopen(fd, "w") as f:
                f.write(text)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise SaveFailure(f"{self.path}: {e.strerror or e}") from e
        log.info(f"Saved {len(records)} records to {self.path}")

    def exists(self) -> bool:
        return self.path.exists()

    def ensure_exists(self) -> bool:
        """Write the default config if there is none yet.

        Returns:
            True if the default was written.
        """
        if self.exists():
            return False
        self.save_records(DEFAULT_RECORDS)
        log.info(f"Wrote default bind config to {self.path}")
        return True

"""File helpers shared by the JSON repositories.

A JsonDocument is one JSON array file held in memory for the span of a
unit of work.  Repositories read and replace its records; nothing
touches the disk until the unit of work commits.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path


class JsonDocument:

    def __init__(self, file_path: Path) -> None:
        self.path = file_path
        self._records: list[dict] | None = None
        self.dirty = False

    @property
    def records(self) -> list[dict]:
        if self._records is None:
            self._records = read_json(self.path, default=[])
        return self._records

    def replace(self, records: list[dict]) -> None:
        self._records = records
        self.dirty = True

    def discard(self) -> None:
        self._records = None
        self.dirty = False

    def mark_clean(self) -> None:
        self.dirty = False


def read_json(path: Path, default):
    if not path.exists():
        return default
    return json.loads(path.read_text(encoding="utf-8"))


def write_json_atomic(path: Path, data) -> None:
    """Write *data* to *path* so readers see the old file or the new one.

    Writes to a temporary file in the same directory, flushes it to disk,
    then renames it over the target.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        prefix=f".tmp_{path.stem}_",
        suffix=".json",
        delete=False,
        encoding="utf-8",
    ) as tmp_file:
        tmp_file.write(json.dumps(data, indent=2) + "\n")
        tmp_file.flush()
        os.fsync(tmp_file.fileno())
        tmp_path = tmp_file.name
    try:
        os.replace(tmp_path, path)
    except OSError:
        Path(tmp_path).unlink(missing_ok=True)
        raise

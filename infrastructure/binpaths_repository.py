# ============================================================================
# BINARY PATH REPOSITORY
# ============================================================================
# STATUS: Infrastructure - persisted tool path cache
# PURPOSE: Load/save the tool name -> path mapping as a flat JSON object
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: BinaryPathStore
# DEPENDENCIES: core.models.ToolRecord
# ============================================================================
"""
Binary Path Store.

Persists resolved external tool paths so the expensive GDAL search runs once
per machine, not once per invocation.

File format (flat JSON object, string values):
    {
        "gdalinfo": "/usr/bin/gdalinfo",
        "gdal_calc": "/usr/bin/gdal_calc.py",
        "wget": "",
        "aria2c": "/usr/bin/aria2c"
    }

An empty string means "searched, not found". Keys this version does not know
about, and values that are not strings, are carried over unchanged on save.

Writes go to a temporary file in the same directory which then replaces the
store with os.replace, so a crash mid-write leaves the previous store intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from core.models import ToolRecord
from exceptions import ConfigurationError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "binpaths_repository")


class BinaryPathStore:
    """
    JSON-file backed mapping of tool name to ToolRecord.

    Last writer wins; no locking.

    Usage:
        store = BinaryPathStore(config.tools.binpaths_path)
        records = store.load()
        records["wget"] = ToolRecord(name="wget", path="/usr/bin/wget")
        store.save(records)
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_raw(self) -> Dict[str, Any]:
        """Raw JSON object on disk, {} when the store does not exist yet."""
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Binary path store {self._path} is not valid JSON: {e}"
            )
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"Binary path store {self._path} must contain a JSON object, "
                f"got {type(raw).__name__}"
            )
        return raw

    def load(self) -> Dict[str, ToolRecord]:
        """
        Read the persisted store.

        Returns:
            Mapping of tool name to ToolRecord; empty when the file is absent.
            Entries with non-string values are skipped here and preserved
            by save().
        """
        raw = self._read_raw()
        records = {}
        for name, value in raw.items():
            if isinstance(value, str):
                records[name] = ToolRecord.from_invocation(name, value)
            else:
                logger.debug(f"Keeping non-string store entry '{name}' as is")
        logger.debug(f"Loaded {len(records)} tool paths from {self._path}")
        return records

    def get(self, name: str) -> Optional[ToolRecord]:
        return self.load().get(name)

    def save(self, records: Mapping[str, ToolRecord]) -> None:
        """
        Write the full mapping atomically.

        Keys already on disk but absent from `records` are preserved, and so
        is the exact text of any entry whose record did not change.
        """
        merged = self._read_raw()
        for name, record in records.items():
            current = merged.get(name)
            if isinstance(current, str) and ToolRecord.from_invocation(name, current) == record:
                continue
            merged[name] = record.invocation

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=str(self._path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(merged, f, indent=2, sort_keys=True)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.info(f"Saved {len(records)} tool paths to {self._path}")

    def update(self, records: Iterable[ToolRecord]) -> Dict[str, ToolRecord]:
        """Load, merge `records` by name, save. Returns the merged mapping."""
        current = self.load()
        for record in records:
            current[record.name] = record
        self.save(current)
        return current

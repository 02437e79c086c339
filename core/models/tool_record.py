# ============================================================================
# TOOL RECORD AND CAPABILITY REPORT MODELS
# ============================================================================
# STATUS: Core model - external tool resolution results
# PURPOSE: Typed store entries and resolver output
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ToolRecord, CapabilityReport
# DEPENDENCIES: pydantic
# ============================================================================
"""
Tool Record and Capability Report Models.

ToolRecord is one entry of the binary path store. Its persisted form is a
single invocation string: either a plain path, or an interpreter and a script
separated by a space, as in "<OSGeo4W>/bin/python.exe <OSGeo4W>/bin/gdal_calc.py".
Interpreter/script pairs only occur on Windows, so a part containing spaces
is wrapped in double quotes and backslashes are never escapes.

CapabilityReport is produced fresh by every resolution call. It is truthy
when the verdict is not FAIL, so callers written against a boolean "ok"
signal keep working:

    if not resolver.resolve(abort=False):
        skip_processing()
"""

import os
import shlex
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import ToolStatus, Verdict


def _quote(part: str) -> str:
    """Double-quote a Windows command line part when it contains whitespace."""
    if any(c.isspace() for c in part):
        return f'"{part}"'
    return part


def _unquote(part: str) -> str:
    if len(part) >= 2 and part[0] == part[-1] and part[0] in "\"'":
        return part[1:-1]
    return part


class ToolRecord(BaseModel):
    """
    One resolved external tool.

    Attributes:
        name: Tool name and store key (gdalinfo, gdal_calc, wget)
        path: Absolute path of the executable or script, "" when not found
        prefix: Interpreter to invoke a script-based tool with, if needed
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    path: str = Field(default="")
    prefix: Optional[str] = Field(default=None)

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def invocation(self) -> str:
        """Single-string form persisted in the store."""
        if self.prefix:
            return f"{_quote(self.prefix)} {_quote(self.path)}"
        return self.path

    @property
    def command(self) -> List[str]:
        """argv prefix for subprocess calls."""
        if not self.path:
            return []
        if self.prefix:
            return [self.prefix, self.path]
        return [self.path]

    def is_valid(self) -> bool:
        """True when the path still points at an existing, runnable file."""
        if not self.path or not os.path.isfile(self.path):
            return False
        if self.prefix:
            return os.path.isfile(self.prefix) and os.access(self.prefix, os.X_OK)
        return os.access(self.path, os.X_OK)

    @classmethod
    def missing(cls, name: str) -> 'ToolRecord':
        return cls(name=name, path="")

    @classmethod
    def from_invocation(cls, name: str, value: str) -> 'ToolRecord':
        """
        Parse the persisted single-string form.

        A value naming an existing file is a plain path, even with spaces in
        it. Otherwise a value that splits into exactly "<interpreter> <*.py>"
        is an interpreter/script pair.
        """
        value = (value or "").strip()
        if not value or os.path.isfile(value):
            return cls(name=name, path=value)
        try:
            parts = [_unquote(p) for p in shlex.split(value, posix=False)]
        except ValueError:
            return cls(name=name, path=value)
        if len(parts) == 2 and parts[1].lower().endswith(".py"):
            return cls(name=name, prefix=parts[0], path=parts[1])
        return cls(name=name, path=value)


@dataclass
class CapabilityReport:
    """
    Outcome of one resolution pass.

    Attributes:
        verdict: PASS, DEGRADED or FAIL
        statuses: Per requested tool, FOUND or MISSING
        records: ToolRecord set as persisted after this pass
        missing: Requested tools that were not found
        error_type: Exception class name of the failure kind, if any
        message: Human-readable outcome message
        version: Toolkit version in use (GDAL resolution only)
    """
    verdict: Verdict
    statuses: Dict[str, ToolStatus] = field(default_factory=dict)
    records: Dict[str, ToolRecord] = field(default_factory=dict)
    missing: List[str] = field(default_factory=list)
    error_type: Optional[str] = None
    message: Optional[str] = None
    version: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.verdict != Verdict.FAIL

    def __bool__(self) -> bool:
        return self.ok

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        result = {
            "verdict": self.verdict.value,
            "ok": self.ok,
            "statuses": {name: status.value for name, status in self.statuses.items()},
            "records": {name: record.invocation for name, record in self.records.items()},
        }
        if self.missing:
            result["missing"] = list(self.missing)
        if self.error_type:
            result["error_type"] = self.error_type
        if self.message:
            result["message"] = self.message
        if self.version:
            result["version"] = self.version
        return result

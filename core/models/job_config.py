# ============================================================================
# JOB CONFIGURATION MODELS
# ============================================================================
# STATUS: Core model - Pydantic V2 job parameter schema
# PURPOSE: Typed schema for download/processing job parameters
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: JobParameters, JobConfig, ParameterIssue, ErrorReport
# DEPENDENCIES: pydantic
# ============================================================================
"""
Job Configuration Models.

JobParameters is the input schema: it accepts what users actually write in
parameter files (a bare "NDVI" instead of ["NDVI"], a timewindow given as a
number of days, a single date or a pair of strings). JobConfig is the
corrected output: timewindow is always a (start, end) pair of dates or absent.

Field names follow the parameter files of the processing scripts
(list_prods, list_indices, mask_type, list_rgb); camelCase aliases
(listProducts, listIndices, maskType, listRgb) are accepted as well.

extra='allow': a full parameter file carries many keys that only the
download/processing scripts read. They pass through untouched.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from exceptions import ParameterError


def _as_str_list(v):
    """Coerce a scalar string to a one-element list, None to []; drop null entries."""
    if v is None:
        return []
    if isinstance(v, str):
        return [v] if v.strip() else []
    if isinstance(v, (list, tuple)):
        return [item for item in v if item is not None]
    return v


class JobParameters(BaseModel):
    """
    Raw job parameters as loaded from a file or passed in memory.

    timewindow is deliberately untyped here: its many accepted shapes are
    resolved by the normalizer, which reports precise errors for each.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    timewindow: Optional[Any] = Field(
        default=None,
        description="Zero, one or two dates, or a number of days back"
    )

    online: bool = Field(
        default=True,
        description="Online mode; without timewindow the last 90 days are searched"
    )

    list_prods: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("list_prods", "listProducts", "list_products"),
        description="Selected products (TOA, BOA, SCL, ...)"
    )

    list_indices: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("list_indices", "listIndices"),
        description="Selected spectral indices (NDVI, MSAVI2, ...)"
    )

    mask_type: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("mask_type", "maskType"),
        description="Cloud mask selector; 'none' disables masking"
    )

    list_rgb: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("list_rgb", "listRgb"),
        description="RGB composites, e.g. RGB432B (bands 4,3,2 from BOA)"
    )

    path_rgb: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("path_rgb", "pathRgb"),
        description="Output folder for RGB images"
    )

    @field_validator("list_prods", "list_indices", "list_rgb", mode="before")
    @classmethod
    def _scalar_to_list(cls, v):
        return _as_str_list(v)


class JobConfig(JobParameters):
    """
    Corrected job configuration.

    Invariants:
        - timewindow is None or (start, end) with start <= end
        - every list_rgb entry has bands in [1, 12], and no band 10 for BOA
    """

    timewindow: Optional[Tuple[date, date]] = Field(
        default=None,
        description="(start, end) dates, start <= end"
    )

    def to_parameters(self) -> Dict[str, Any]:
        """JSON-ready dict for the download/processing scripts."""
        return self.model_dump(mode="json")


# ============================================================================
# NORMALIZER ERROR REPORT
# ============================================================================

@dataclass
class ParameterIssue:
    """One parameter violation."""
    kind: Type[ParameterError]
    field: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.__name__,
            "field": self.field,
            "message": self.message,
        }


@dataclass
class ErrorReport:
    """
    Violations collected in 'string' mode.

    Truthy when it holds at least one issue.
    """
    issues: List[ParameterIssue] = field(default_factory=list)

    @property
    def messages(self) -> List[str]:
        return [issue.message for issue in self.issues]

    @property
    def kinds(self) -> List[Type[ParameterError]]:
        return [issue.kind for issue in self.issues]

    def add(self, kind: Type[ParameterError], field_name: str, message: str) -> None:
        self.issues.append(ParameterIssue(kind=kind, field=field_name, message=message))

    def __bool__(self) -> bool:
        return bool(self.issues)

    def __len__(self) -> int:
        return len(self.issues)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_count": len(self.issues),
            "issues": [issue.to_dict() for issue in self.issues],
        }

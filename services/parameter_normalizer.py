# ============================================================================
# PARAMETER NORMALIZER
# ============================================================================
# STATUS: Service - job parameter validation and auto-correction
# PURPOSE: Turn a raw parameter set into a corrected JobConfig
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ParameterNormalizer, normalize_parameters
# DEPENDENCIES: pydantic
# ============================================================================
"""
Parameter Normalizer.

Single entry point for job parameters coming from a JSON file or from an
in-memory dict. Steps, in order:

    1. Shape     dict, JobParameters/JobConfig, or path of a JSON file
    2. Schema    pydantic validation; each bad field is one issue
    3. Window    timewindow -> (start, end) dates
    4. Mask      mask_type cleared when nothing selected is worth masking
    5. RGB       invalid composites dropped, one warning each

Violations are reported according to `mode`:

    "string"    collect them; normalize() returns an ErrorReport
    "error"     the first one raises its ParameterError subclass
    "warning"   each is logged as a warning and the offending value dropped

Shape failures (missing file, unreadable JSON, not a mapping) always raise:
without a record there is nothing left to validate.

Auto-corrections (mask clearing, RGB drops) are not violations: they always
emit a warning and never fail.

Usage:
    normalizer = ParameterNormalizer()
    result = normalizer.normalize("params.json", mode="string")
    if isinstance(result, ErrorReport):
        for message in result.messages:
            print(message)
"""

import json
import math
import os
import re
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple, Type, Union

from pydantic import AliasChoices, ValidationError

from config import NormalizerConfig, NormalizerDefaults
from core.models import (
    ErrorReport,
    JobConfig,
    JobParameters,
    NormalizeMode,
    RgbSource,
    Severity,
)
from exceptions import (
    ContractViolationError,
    ParameterError,
    RangeError,
    ShapeError,
    TypeCoercionError,
)
from util_logger import LoggerFactory, ComponentType

from .messaging import Messenger, translate as _

logger = LoggerFactory.create_logger(ComponentType.VALIDATOR, "parameter_normalizer")

RGB_PATTERN = re.compile(r"^RGB([0-9a-fA-F])([0-9a-fA-F])([0-9a-fA-F])([TB])$")

# pydantic error types meaning "wrong structure" rather than "wrong value"
_SHAPE_ERROR_TYPES = {
    "list_type",
    "tuple_type",
    "dict_type",
    "model_type",
    "model_attributes_type",
    "too_long",
    "too_short",
}

NormalizeResult = Union[JobConfig, ErrorReport, None]


def _field_keys() -> Dict[str, Set[str]]:
    """Field name -> every key accepted for it (name and aliases)."""
    keys = {}
    for name, info in JobParameters.model_fields.items():
        accepted = {name}
        alias = info.validation_alias
        if isinstance(alias, AliasChoices):
            accepted.update(c for c in alias.choices if isinstance(c, str))
        elif isinstance(alias, str):
            accepted.add(alias)
        keys[name] = accepted
    return keys


def parse_rgb(spec: str) -> Optional[Tuple[Tuple[int, int, int], RgbSource]]:
    """
    Decode an RGB composite specifier.

    Example:
        >>> parse_rgb("RGB9abT")
        ((9, 10, 11), <RgbSource.TOA: 'T'>)

    Returns:
        (bands, source), or None if the specifier is malformed
    """
    if not isinstance(spec, str):
        return None
    match = RGB_PATTERN.match(spec.strip())
    if not match:
        return None
    bands = tuple(int(digit, 16) for digit in match.groups()[:3])
    return bands, RgbSource(match.group(4))


def rgb_problem(spec: str) -> Optional[str]:
    """Why `spec` cannot be produced, or None if it is valid."""
    parsed = parse_rgb(spec)
    if parsed is None:
        return _("malformed specifier (expected RGB followed by three hex band digits and T or B)")
    bands, source = parsed
    if any(b < NormalizerDefaults.MIN_BAND or b > NormalizerDefaults.MAX_BAND for b in bands):
        return _("band numbers must be between {low} and {high}").format(
            low=NormalizerDefaults.MIN_BAND, high=NormalizerDefaults.MAX_BAND
        )
    if source == RgbSource.BOA and any(b in NormalizerDefaults.BOA_EXCLUDED_BANDS for b in bands):
        return _("band 10 is not available in BOA products")
    return None


class ParameterNormalizer:
    """
    Validates and corrects job parameter sets.

    Args:
        config: Baseline products and online window length
        messenger: report() channel (defaults to a logging Messenger)
        today: Reference date for relative windows (defaults to date.today())
    """

    def __init__(
        self,
        config: Optional[NormalizerConfig] = None,
        messenger: Optional[Messenger] = None,
        today: Optional[date] = None
    ):
        self.config = config or NormalizerConfig()
        self.messenger = messenger or Messenger(logger)
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    # ------------------------------------------------------------------
    # violation reporting
    # ------------------------------------------------------------------

    def _violation(
        self,
        report: ErrorReport,
        mode: NormalizeMode,
        kind: Type[ParameterError],
        field_name: str,
        message: str
    ) -> None:
        report.add(kind, field_name, message)
        if mode == NormalizeMode.ERROR:
            self.messenger.report(Severity.ERROR, message, error_cls=kind)
        elif mode == NormalizeMode.WARNING:
            self.messenger.report(Severity.WARNING, message)

    # ------------------------------------------------------------------
    # step 1: shape
    # ------------------------------------------------------------------

    def _shape_error(self, message: str) -> None:
        self.messenger.report(Severity.ERROR, message, error_cls=ShapeError)

    def load(self, raw: Any) -> Dict[str, Any]:
        """
        Accept a mapping, a parameter model or a JSON file path.

        Raises:
            ShapeError: in every mode
        """
        if isinstance(raw, JobParameters):
            return raw.model_dump()
        if isinstance(raw, dict):
            return dict(raw)
        if isinstance(raw, (str, os.PathLike)):
            path = Path(raw).expanduser()
            if not path.is_file():
                self._shape_error(
                    _("Parameter file '{path}' does not exist.").format(path=path)
                )
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                self._shape_error(
                    _("Parameter file '{path}' could not be read: {error}").format(path=path, error=e)
                )
            if not isinstance(data, dict):
                self._shape_error(
                    _("Parameter file '{path}' must contain a JSON object.").format(path=path)
                )
            logger.debug(f"Loaded {len(data)} parameters from {path}")
            return data

        self._shape_error(
            _("Parameters must be a mapping or the path of a JSON file, got {type}.").format(
                type=type(raw).__name__
            )
        )

    # ------------------------------------------------------------------
    # step 2: schema
    # ------------------------------------------------------------------

    def _validate_schema(self, data: Dict[str, Any], report: ErrorReport, mode: NormalizeMode) -> JobParameters:
        """Validate against JobParameters, dropping every field that fails."""
        field_keys = _field_keys()
        data = dict(data)
        while True:
            try:
                return JobParameters.model_validate(data)
            except ValidationError as e:
                dropped = False
                for err in e.errors():
                    key = err["loc"][0] if err["loc"] else None
                    field_name = next(
                        (name for name, keys in field_keys.items() if key in keys),
                        key
                    )
                    kind = ShapeError if err["type"] in _SHAPE_ERROR_TYPES else TypeCoercionError
                    self._violation(
                        report, mode, kind, str(field_name),
                        _("Parameter '{field}': {detail}.").format(field=field_name, detail=err["msg"])
                    )
                    for k in field_keys.get(field_name, {key}):
                        if k in data:
                            data.pop(k)
                            dropped = True
                if not dropped:
                    raise

    # ------------------------------------------------------------------
    # step 3: timewindow
    # ------------------------------------------------------------------

    @staticmethod
    def _to_date(value: Any) -> Optional[date]:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            text = value.strip()
            try:
                return date.fromisoformat(text)
            except ValueError:
                pass
            try:
                return datetime.fromisoformat(text).date()
            except ValueError:
                return None
        return None

    def normalize_timewindow(
        self,
        timewindow: Any,
        online: bool,
        report: ErrorReport,
        mode: NormalizeMode
    ) -> Optional[Tuple[date, date]]:
        """
        Corrected (start, end) window, or None.

        A list holding only nulls counts as absent. None is returned for an
        absent window in offline mode and for an invalid window in non-fatal
        modes.
        """
        today = self.today
        if isinstance(timewindow, (list, tuple)) and all(v is None for v in timewindow):
            timewindow = None
        if timewindow is None or (isinstance(timewindow, str) and len(timewindow) == 0):
            if online:
                return today - timedelta(days=self.config.online_window_days), today
            return None

        values = list(timewindow) if isinstance(timewindow, (list, tuple)) else [timewindow]

        if len(values) > 2:
            self._violation(
                report, mode, RangeError, "timewindow",
                _("Parameter 'timewindow' must be of length 1 or 2.")
            )
            return None

        if len(values) == 1:
            value = values[0]
            if isinstance(value, bool):
                self._violation(
                    report, mode, TypeCoercionError, "timewindow",
                    _("Parameter 'timewindow' must be a Date object or a number of days.")
                )
                return None
            if isinstance(value, (int, float)):
                try:
                    if not math.isfinite(value):
                        raise OverflowError(value)
                    values = [today - timedelta(days=value), today]
                except OverflowError:
                    self._violation(
                        report, mode, RangeError, "timewindow",
                        _("Parameter 'timewindow' is not a usable number of days.")
                    )
                    return None
            elif isinstance(value, timedelta):
                values = [today - value, today]
            else:
                values = [value, value]

        dates = [self._to_date(v) for v in values]
        if any(d is None for d in dates):
            self._violation(
                report, mode, TypeCoercionError, "timewindow",
                _("Parameter 'timewindow' must be a Date object.")
            )
            return None

        start, end = dates
        if start > end:
            self._violation(
                report, mode, RangeError, "timewindow",
                _("Parameter 'timewindow': start date {start} is after end date {end}.").format(
                    start=start.isoformat(), end=end.isoformat()
                )
            )
            return None
        return start, end

    # ------------------------------------------------------------------
    # steps 4-5: auto-corrections
    # ------------------------------------------------------------------

    def correct_mask(self, params: JobParameters) -> Optional[str]:
        """mask_type, cleared to 'none' when nothing selected can be masked."""
        mask_type = params.mask_type
        if mask_type is None or mask_type.lower() == NormalizerDefaults.MASK_NONE:
            return mask_type

        baseline = {p.upper() for p in self.config.baseline_products}
        maskable = [p for p in params.list_prods if p.upper() not in baseline]
        if params.list_indices or maskable:
            return mask_type

        self.messenger.report(
            Severity.WARNING,
            _("Parameter 'mask_type' ({mask}) cleared: no index or maskable product is selected.").format(
                mask=mask_type
            )
        )
        return NormalizerDefaults.MASK_NONE

    def correct_rgb(self, list_rgb: List[str]) -> List[str]:
        """Valid RGB specifiers, in their original order."""
        retained = []
        for spec in list_rgb:
            problem = rgb_problem(spec)
            if problem is None:
                retained.append(spec)
                continue
            self.messenger.report(
                Severity.WARNING,
                _("RGB image '{spec}' was removed: {problem}.").format(spec=spec, problem=problem)
            )
        return retained

    # ------------------------------------------------------------------
    # entry point
    # ------------------------------------------------------------------

    def normalize(self, raw: Any, mode: Union[str, NormalizeMode] = NormalizeMode.STRING, correct: bool = True) -> NormalizeResult:
        """
        Validate and correct a parameter set.

        Args:
            raw: dict, JobParameters/JobConfig, or path of a JSON file
            mode: "string", "error" or "warning"
            correct: Return the corrected JobConfig (True) or only validate (False)

        Returns:
            ErrorReport when mode="string" and violations were found;
            otherwise the corrected JobConfig if correct, else None

        Raises:
            ShapeError: missing file or malformed record, in every mode
            ParameterError: first violation, when mode="error"
        """
        try:
            mode = NormalizeMode(mode)
        except ValueError:
            raise ContractViolationError(
                f"mode must be one of {[m.value for m in NormalizeMode]}, got {mode!r}"
            )

        data = self.load(raw)
        report = ErrorReport()

        params = self._validate_schema(data, report, mode)
        timewindow = self.normalize_timewindow(params.timewindow, params.online, report, mode)
        mask_type = self.correct_mask(params)
        list_rgb = self.correct_rgb(params.list_rgb)

        if report:
            logger.info(f"{len(report)} parameter violation(s) found (mode={mode.value})")
            if mode == NormalizeMode.STRING:
                return report

        if not correct:
            return None

        corrected = params.model_dump()
        corrected.update(timewindow=timewindow, mask_type=mask_type, list_rgb=list_rgb)
        return JobConfig.model_validate(corrected)


def normalize_parameters(
    raw: Any,
    mode: Union[str, NormalizeMode] = NormalizeMode.STRING,
    correct: bool = True,
    config: Optional[NormalizerConfig] = None
) -> NormalizeResult:
    """Module-level convenience wrapper around ParameterNormalizer.normalize()."""
    return ParameterNormalizer(config=config).normalize(raw, mode=mode, correct=correct)

"""
Parameter Normalizer Configuration.

Exports:
    NormalizerConfig: Pydantic configuration model
"""

import os
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from exceptions import ConfigurationError
from .defaults import NormalizerDefaults


class NormalizerConfig(BaseModel):
    """
    Domain constants used while correcting job parameters.

    Baseline products are kept configurable: which layers count as
    "not worth masking" is a property of the product catalogue, not a rule
    that can be derived from product names.
    """

    model_config = ConfigDict(frozen=True)

    baseline_products: Tuple[str, ...] = Field(
        default=NormalizerDefaults.BASELINE_PRODUCTS,
        description="Products that do not make a mask applicable on their own",
        examples=[("SCL",)]
    )

    online_window_days: int = Field(
        default=NormalizerDefaults.ONLINE_WINDOW_DAYS,
        ge=1,
        description="Days back searched in online mode when no timewindow is given"
    )

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        kwargs = {}

        baseline_raw = os.environ.get("SEN2PREP_BASELINE_PRODUCTS")
        if baseline_raw is not None:
            kwargs["baseline_products"] = tuple(
                p.strip() for p in baseline_raw.split(",") if p.strip()
            )

        days_raw = os.environ.get("SEN2PREP_ONLINE_DAYS")
        if days_raw:
            try:
                kwargs["online_window_days"] = int(days_raw)
            except ValueError:
                raise ConfigurationError(
                    f"SEN2PREP_ONLINE_DAYS must be an integer, got '{days_raw}'"
                )

        return cls(**kwargs)

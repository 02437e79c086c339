"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - ToolSearchConfig (external tool discovery)
    - NormalizerConfig (job parameter normalization)

Exports:
    AppConfig: Main configuration class

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
"""

import os

from pydantic import BaseModel, Field

from .toolkit_config import ToolSearchConfig
from .normalizer_config import NormalizerConfig


class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.
    """

    debug_mode: bool = Field(
        default=False,
        description="Verbose diagnostics. Set SEN2PREP_DEBUG=true to enable."
    )

    tools: ToolSearchConfig = Field(default_factory=ToolSearchConfig)
    normalizer: NormalizerConfig = Field(default_factory=NormalizerConfig)

    @classmethod
    def from_environment(cls) -> 'AppConfig':
        """Load all domain configs from environment variables."""
        return cls(
            debug_mode=os.environ.get("SEN2PREP_DEBUG", "false").lower() == "true",
            tools=ToolSearchConfig.from_environment(),
            normalizer=NormalizerConfig.from_environment(),
        )

# ============================================================================
# USER-FACING MESSAGING
# ============================================================================
# STATUS: Service - single report() channel for resolvers and normalizer
# PURPOSE: Route message/warning/error to the logger; error unwinds
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Messenger, translate
# ============================================================================
"""
User-Facing Messaging.

Resolvers and the normalizer only ever call `report(severity, message)`.
How messages are displayed is the messenger's business; the default
implementation writes them to a component logger and keeps a history that
the CLI (and tests) can inspect.

Severity ERROR is fatal: report() raises the given BusinessLogicError
subclass after logging.

Localization:
    Message templates go through gettext (`translate`). Catalogs are looked
    up in SEN2PREP_LOCALEDIR (domain "sen2prep"); without a catalog the
    English template is used.
"""

import gettext
import logging
import os
from typing import List, Optional, Tuple, Type

from core.models import Severity
from exceptions import BusinessLogicError, ContractViolationError
from util_logger import LoggerFactory, ComponentType

_translation = gettext.translation(
    "sen2prep",
    localedir=os.environ.get("SEN2PREP_LOCALEDIR"),
    fallback=True
)

translate = _translation.gettext


class Messenger:
    """
    Default report() implementation backed by a logger.

    Attributes:
        history: (severity, message) pairs in reporting order
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or LoggerFactory.create_logger(ComponentType.SERVICE, "messenger")
        self.history: List[Tuple[Severity, str]] = []

    @property
    def warnings(self) -> List[str]:
        return [msg for severity, msg in self.history if severity == Severity.WARNING]

    @property
    def errors(self) -> List[str]:
        return [msg for severity, msg in self.history if severity == Severity.ERROR]

    def report(
        self,
        severity: Severity,
        message: str,
        error_cls: Type[BusinessLogicError] = BusinessLogicError,
        hint: str = ""
    ) -> None:
        """
        Report a message.

        Args:
            severity: MESSAGE, WARNING or ERROR
            message: Human-readable, already translated message
            error_cls: Exception raised for ERROR severity
            hint: Remediation hint appended to the message

        Raises:
            error_cls: when severity is ERROR
        """
        if not isinstance(severity, Severity):
            raise ContractViolationError(
                f"severity must be a Severity, got {type(severity).__name__}"
            )

        text = f"{message} {hint}".strip() if hint else message
        self.history.append((severity, text))

        if severity == Severity.MESSAGE:
            self._logger.info(text)
        elif severity == Severity.WARNING:
            self._logger.warning(text)
        else:
            if not (isinstance(error_cls, type) and issubclass(error_cls, BusinessLogicError)):
                raise ContractViolationError(
                    f"error_cls must be a BusinessLogicError subclass, got {error_cls!r}"
                )
            self._logger.error(text, extra={'custom_dimensions': {'error_type': error_cls.__name__}})
            raise error_cls(message, hint)

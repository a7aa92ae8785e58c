"""
Centralized logging utilities for termform.

Standard log formats for form events, key dispatch and terminal failures so
every module reports them the same way.
"""

import logging
from typing import Any, Optional

from ..warnings import CategorizedLogger, WarningCategory, WarningFilters


def log_form_event(
    logger: logging.Logger,
    event: str,
    details: str = "",
    form_title: Optional[str] = None,
) -> None:
    """Log a form lifecycle event (drawn, accepted, cancelled...).

    ``form_title`` is attached to the record for :class:`termform.JSONFormatter`.
    """
    detail_str = f": {details}" if details else ""
    extra = {"form_title": form_title} if form_title else None
    logger.info(f"[FORM] {event}{detail_str}", extra=extra)


def log_key_dispatch(logger: logging.Logger, key: Any, target: str) -> None:
    """Log where a keystroke was routed."""
    logger.debug(f"Key {key} -> {target}")


def log_debug_operation(
    logger: logging.Logger, operation: str, details: str = ""
) -> None:
    """Log debug information for an operation."""
    detail_str = f": {details}" if details else ""
    logger.debug(f"{operation}{detail_str}")


def log_screen_error(
    logger: logging.Logger, operation: str, error: Exception
) -> None:
    """Log terminal driver failures with consistent format."""
    category = WarningCategory.SCREEN_IO.value.upper()
    extra = {"operation": operation, "error_type": type(error).__name__}
    logger.error(
        f"[{category}] Terminal {operation} failed: {error}",
        extra={"termform_extra": extra},
    )


def log_categorized_warning(
    logger: logging.Logger,
    category: WarningCategory,
    operation: str,
    reason: str,
    filters: Optional[WarningFilters] = None,
) -> None:
    """Log a warning under ``category``, honouring the category filters."""
    CategorizedLogger(logger, filters).warning(category, f"{operation}: {reason}")


def log_layout_rejected(
    logger: logging.Logger,
    operation: str,
    reason: str,
    filters: Optional[WarningFilters] = None,
) -> None:
    """Log a field that could not be placed on the form."""
    CategorizedLogger(logger, filters).log_layout_warning(f"{operation}: {reason}")


def log_input_rejected(
    logger: logging.Logger,
    field_name: str,
    key: Any,
    reason: str = "",
    filters: Optional[WarningFilters] = None,
) -> None:
    """Log a keystroke a field refused. Routine, so it goes out at DEBUG."""
    reason_str = f" ({reason})" if reason else ""
    CategorizedLogger(logger, filters).log_input_rejected(
        f"{field_name} rejected {key}{reason_str}", extra={"data_name": field_name}
    )


def log_function_key_warning(
    logger: logging.Logger,
    operation: str,
    reason: str,
    filters: Optional[WarningFilters] = None,
) -> None:
    """Log a function-key binding conflict."""
    CategorizedLogger(logger, filters).log_function_key_warning(
        f"{operation}: {reason}"
    )


def log_configuration_warning(
    logger: logging.Logger,
    operation: str,
    reason: str,
    filters: Optional[WarningFilters] = None,
) -> None:
    """Log configuration warnings."""
    CategorizedLogger(logger, filters).log_configuration_warning(
        f"{operation}: {reason}"
    )


__all__ = [
    "log_form_event",
    "log_key_dispatch",
    "log_debug_operation",
    "log_screen_error",
    "log_categorized_warning",
    "log_layout_rejected",
    "log_input_rejected",
    "log_function_key_warning",
    "log_configuration_warning",
]

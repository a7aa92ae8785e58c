"""
Categorized warning infrastructure for termform.

Provides the categorized logger and the command-line hooks that configure
category filters.
"""

import logging
from typing import Any, Optional

from .categories import WarningCategory, WarningFilters, get_warning_filters

logger = logging.getLogger(__name__)


class CategorizedLogger:
    """A logger that supports categorized warnings with filtering."""

    def __init__(
        self, logger: logging.Logger, filters: Optional[WarningFilters] = None
    ) -> None:
        """Initialize categorized logger.

        Args:
            logger: The underlying logger instance
            filters: Warning filters to use (uses global filters if None)
        """
        self._logger = logger
        self._filters = filters or get_warning_filters()

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def log(
        self, level: int, category: WarningCategory, message: str, **kwargs: Any
    ) -> None:
        """Log ``message`` under ``category`` if the filters allow it."""
        if self._filters.should_log(category, level):
            self._logger.log(level, f"[{category.value.upper()}] {message}", **kwargs)

    def warning(self, category: WarningCategory, message: str, **kwargs: Any) -> None:
        self.log(logging.WARNING, category, message, **kwargs)

    def info(self, category: WarningCategory, message: str, **kwargs: Any) -> None:
        self.log(logging.INFO, category, message, **kwargs)

    def error(self, category: WarningCategory, message: str, **kwargs: Any) -> None:
        self.log(logging.ERROR, category, message, **kwargs)

    def debug(self, category: WarningCategory, message: str, **kwargs: Any) -> None:
        self.log(logging.DEBUG, category, message, **kwargs)

    def log_layout_warning(self, message: str, **kwargs: Any) -> None:
        """Convenience method for layout warnings."""
        self.warning(WarningCategory.LAYOUT, message, **kwargs)

    def log_input_rejected(self, message: str, **kwargs: Any) -> None:
        """Convenience method for refused keystrokes."""
        self.debug(WarningCategory.INPUT, message, **kwargs)

    def log_function_key_warning(self, message: str, **kwargs: Any) -> None:
        """Convenience method for function-key binding warnings."""
        self.warning(WarningCategory.FUNCTION_KEYS, message, **kwargs)

    def log_configuration_warning(self, message: str, **kwargs: Any) -> None:
        """Convenience method for configuration warnings."""
        self.warning(WarningCategory.CONFIGURATION, message, **kwargs)

    def log_state_warning(self, message: str, **kwargs: Any) -> None:
        """Convenience method for run-state warnings."""
        self.warning(WarningCategory.STATE_MANAGEMENT, message, **kwargs)


def get_categorized_logger(
    name: str, filters: Optional[WarningFilters] = None
) -> CategorizedLogger:
    """Get a categorized logger by name."""
    return CategorizedLogger(logging.getLogger(name), filters)


def add_warning_arguments(parser: Any) -> None:
    """Add command-line arguments for warning configuration.

    Args:
        parser: ArgumentParser instance
    """
    parser.add_argument(
        "--disable-warning-categories",
        nargs="*",
        default=[],
        help="Warning categories to disable (e.g., input layout)",
    )
    parser.add_argument(
        "--enable-warning-categories",
        nargs="*",
        default=[],
        help="Warning categories to enable",
    )


def configure_warnings_from_args(args: Any) -> WarningFilters:
    """Configure the global warning filters from parsed command-line arguments."""
    filters = get_warning_filters()

    for category_name in getattr(args, "disable_warning_categories", []):
        try:
            filters.disable_category(WarningCategory(category_name.lower()))
        except ValueError:
            logger.warning(f"Unknown warning category: {category_name}")

    for category_name in getattr(args, "enable_warning_categories", []):
        try:
            filters.enable_category(WarningCategory(category_name.lower()))
        except ValueError:
            logger.warning(f"Unknown warning category: {category_name}")

    return filters

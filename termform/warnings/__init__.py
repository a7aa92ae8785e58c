"""
termform warning categorization system.

Lets callers tell routine messages (a refused keystroke) apart from ones that
need attention (a failed terminal query) and filter them by category.
"""

from .categories import (
    WarningCategory,
    WarningFilters,
    configure_default_filters,
    get_warning_filters,
)
from .infrastructure import (
    CategorizedLogger,
    add_warning_arguments,
    configure_warnings_from_args,
    get_categorized_logger,
)

__all__ = [
    "WarningCategory",
    "WarningFilters",
    "get_warning_filters",
    "configure_default_filters",
    "CategorizedLogger",
    "get_categorized_logger",
    "add_warning_arguments",
    "configure_warnings_from_args",
]

# Initialize default filters on import
configure_default_filters()

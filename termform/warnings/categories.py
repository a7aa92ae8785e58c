"""
Warning categories for termform.

Categories separate rejected input and layout problems, which are usually
harmless, from screen I/O and configuration problems that need attention.
"""

import logging
from enum import Enum
from typing import Dict, Set


class WarningCategory(Enum):
    """Enumeration of warning categories."""

    INPUT = "input"  # Keystrokes a field refused
    LAYOUT = "layout"  # Overlapping or off-screen fields
    VALIDATION = "validation"  # Field content failing its pattern
    SCREEN_IO = "screen_io"  # Terminal query or paint failures
    FUNCTION_KEYS = "function_keys"  # Binding conflicts and reassignments
    CONFIGURATION = "configuration"  # Invalid settings
    STATE_MANAGEMENT = "state_management"  # Run-state transitions


class WarningFilters:
    """Manages warning category filters."""

    def __init__(self) -> None:
        self._enabled_categories: Set[WarningCategory] = set(WarningCategory)
        self._disabled_categories: Set[WarningCategory] = set()
        self._custom_levels: Dict[WarningCategory, int] = {}

    def enable_category(self, category: WarningCategory) -> None:
        """Enable a warning category."""
        self._disabled_categories.discard(category)
        self._enabled_categories.add(category)

    def disable_category(self, category: WarningCategory) -> None:
        """Disable a warning category."""
        self._enabled_categories.discard(category)
        self._disabled_categories.add(category)

    def set_category_level(self, category: WarningCategory, level: int) -> None:
        """Set the minimum logging level for a specific category."""
        self._custom_levels[category] = level

    def is_category_enabled(self, category: WarningCategory) -> bool:
        return (
            category in self._enabled_categories
            and category not in self._disabled_categories
        )

    def should_log(self, category: WarningCategory, level: int) -> bool:
        """Determine if a message of ``level`` in ``category`` should be logged."""
        if not self.is_category_enabled(category):
            return False

        custom_level = self._custom_levels.get(category)
        if custom_level is not None:
            return level >= custom_level

        return True

    def get_enabled_categories(self) -> Set[WarningCategory]:
        return self._enabled_categories - self._disabled_categories

    def get_disabled_categories(self) -> Set[WarningCategory]:
        return self._disabled_categories.copy()

    def reset(self) -> None:
        """Reset all filters to default (all enabled)."""
        self._enabled_categories = set(WarningCategory)
        self._disabled_categories = set()
        self._custom_levels.clear()


# Global warning filters instance
_global_warning_filters = WarningFilters()


def get_warning_filters() -> WarningFilters:
    """Get the global warning filters instance."""
    return _global_warning_filters


def configure_default_filters() -> None:
    """Configure default warning filters.

    Rejected keystrokes are routine while typing, so INPUT messages are only
    logged at DEBUG and above when explicitly lowered; everything else is on.
    """
    filters = get_warning_filters()
    filters.reset()
    filters.set_category_level(WarningCategory.INPUT, logging.DEBUG)

"""
Utilities package for termform.

Contains common utility functions used across the termform codebase.
"""

from .logging_utils import (
    log_categorized_warning,
    log_configuration_warning,
    log_debug_operation,
    log_form_event,
    log_function_key_warning,
    log_input_rejected,
    log_key_dispatch,
    log_layout_rejected,
    log_screen_error,
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

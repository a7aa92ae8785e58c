"""Exceptions for termform with contextual information."""

from enum import Enum
from typing import Any, Dict, Optional


class TermFormError(Exception):
    """Base error for termform with contextual information."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Initialize a termform error.

        Args:
            message: Error message
            context: Optional context information (field, bounds, point, etc.)
            original_exception: Original exception that caused this error
        """
        super().__init__(message)
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        """
        Message with the context appended.

        A ``data_name`` in the context names the field the error is about and
        leads the message; the other items follow as ``(Context: k=v, ...)``.
        """
        base_msg = super().__str__()
        subject = self.context.get("data_name")
        if subject:
            base_msg = f"{subject}: {base_msg}"
        context_items = [
            f"{key}={self.format_context_value(value)}"
            for key, value in self.context.items()
            if key != "data_name"
        ]
        if context_items:
            return f"{base_msg} (Context: {', '.join(context_items)})"
        return base_msg

    @staticmethod
    def format_context_value(value: Any) -> str:
        """Compact text for one context value; enums show their name."""
        if isinstance(value, Enum):
            return value.name
        text = str(value)
        if len(text) > 50:
            text = text[:47] + "..."
        return text

    def __repr__(self) -> str:
        base_repr = super().__repr__()
        if self.context:
            return f"{base_repr} (context={self.context!r})"
        return base_repr

    def add_context(self, key: str, value: Any) -> None:
        """
        Add context information to the exception.

        Args:
            key: Context key
            value: Context value
        """
        self.context[key] = value

    def get_context(self, key: str, default: Any = None) -> Any:
        """
        Get context information from the exception.

        Args:
            key: Context key
            default: Default value if key not found

        Returns:
            Context value or default
        """
        return self.context.get(key, default)


class BoundsError(TermFormError, ValueError):
    """Field geometry is off-screen or has non-positive dimensions."""

    pass


class FieldDefinitionError(TermFormError, ValueError):
    """A field was built with an unusable title, data name, kind or value."""

    pass


class ScreenIOError(TermFormError):
    """Reading from or painting to the terminal failed."""

    pass


class FunctionKeyError(TermFormError, ValueError):
    """A function-key binding targets a key outside F1-F12."""

    pass


class ConfigurationError(TermFormError):
    """Invalid configuration value."""

    pass

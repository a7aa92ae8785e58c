"""
termform package init.
Exports the building blocks of full-screen terminal data-entry forms.
"""

import datetime
import json
import logging
import os
from typing import Optional

from .config import FormSettings
from .exceptions import (
    BoundsError,
    ConfigurationError,
    FieldDefinitionError,
    FunctionKeyError,
    ScreenIOError,
    TermFormError,
)
from .forms import (
    BooleanDisplay,
    BooleanField,
    Controller,
    DateTimeField,
    DecimalField,
    Field,
    FieldCollection,
    FieldKind,
    FieldValue,
    FunctionKeyBinding,
    FunctionKeyCollection,
    IntegerField,
    RunState,
    StringField,
    UnsignedField,
    create_field,
)
from .terminal import (
    CellColor,
    ConsoleColor,
    FieldBounds,
    Key,
    KeyStroke,
    Modifier,
    ScreenBuffer,
    ScreenIO,
    ScreenPoint,
)


class JSONFormatter(logging.Formatter):
    """JSON formatter with form context support."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.datetime.now().isoformat(),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        form_title = getattr(record, "form_title", None)
        if form_title:
            log_entry["form_title"] = form_title

        data_name = getattr(record, "data_name", None)
        if data_name:
            log_entry["data_name"] = data_name

        extra = getattr(record, "termform_extra", {})
        if extra:
            log_entry.update(extra)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
            context = extra.get("context") if extra else None
            if context:
                log_entry["context"] = context

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """
    Setup basic logging configuration.

    A form owns the terminal while it runs, so pass ``log_file`` to keep log
    output off the screen.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Write log records to this file instead of stderr
    """
    use_json = os.environ.get("TERMFORM_LOG_JSON", "false").lower() == "true"
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler: logging.Handler = (
        logging.FileHandler(log_file, encoding="utf-8")
        if log_file
        else logging.StreamHandler()
    )
    if use_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    root.addHandler(handler)


__all__ = [
    "BooleanDisplay",
    "BooleanField",
    "BoundsError",
    "CellColor",
    "ConfigurationError",
    "ConsoleColor",
    "Controller",
    "DateTimeField",
    "DecimalField",
    "Field",
    "FieldBounds",
    "FieldCollection",
    "FieldDefinitionError",
    "FieldKind",
    "FieldValue",
    "FormSettings",
    "FunctionKeyBinding",
    "FunctionKeyCollection",
    "FunctionKeyError",
    "IntegerField",
    "JSONFormatter",
    "Key",
    "KeyStroke",
    "Modifier",
    "RunState",
    "ScreenBuffer",
    "ScreenIO",
    "ScreenIOError",
    "ScreenPoint",
    "StringField",
    "TermFormError",
    "UnsignedField",
    "create_field",
    "setup_logging",
]

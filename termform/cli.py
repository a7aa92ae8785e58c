"""Command-line demo: shows a sample form and prints the values as JSON."""

import argparse
import json
import logging
import sys
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from . import setup_logging
from .config import FormSettings
from .exceptions import ConfigurationError, TermFormError
from .forms import (
    BooleanDisplay,
    BooleanField,
    Controller,
    DateTimeField,
    DecimalField,
    FieldKind,
    FieldValue,
    FunctionKeyCollection,
    IntegerField,
    StringField,
)
from .terminal import FieldBounds, Key, ScreenIO, ScreenPoint
from .terminal.curses_screen import open_terminal
from .utils.logging_utils import log_configuration_warning
from .warnings import add_warning_arguments, configure_warnings_from_args

logger = logging.getLogger(__name__)

LABEL_COLUMN = 2
INPUT_COLUMN = 18


def clear_active_field(fields, active, run):
    """F5 handler: empty the focused field."""
    if active is not None and active.manager.clear():
        active.write()
        active.place_cursor()
    return None


def build_demo_form(
    screen: ScreenIO, date_only: bool = False, settings: Optional[FormSettings] = None
) -> Controller:
    """Controller holding the sample customer form."""
    bindings = FunctionKeyCollection()
    bindings.bind(Key.F5, "Clear field", clear_active_field)
    controller = Controller(screen, "New customer", bindings, settings=settings)

    def at(row: int) -> ScreenPoint:
        return ScreenPoint(LABEL_COLUMN, row)

    controller.fields.add_range(
        [
            StringField(
                screen,
                "Name",
                "",
                at(4),
                FieldBounds.at(INPUT_COLUMN, 4, 30),
                validation_pattern=r"\S",
            ),
            IntegerField(
                screen,
                "Age",
                0,
                at(6),
                FieldBounds.at(INPUT_COLUMN, 6, 4),
                kind=FieldKind.INT16,
            ),
            DecimalField(
                screen,
                "Credit limit",
                Decimal("1000.00"),
                at(8),
                FieldBounds.at(INPUT_COLUMN, 8, 12),
            ),
            BooleanField(
                screen,
                "Newsletter",
                False,
                at(10),
                FieldBounds.at(INPUT_COLUMN, 10, 3),
                display=BooleanDisplay.YES_NO,
            ),
            DateTimeField(
                screen,
                "First visit",
                datetime.now(),
                at(12),
                FieldBounds.at(INPUT_COLUMN, 12, 19),
                date_only=date_only,
            ),
            StringField(
                screen,
                "Notes",
                "",
                at(14),
                FieldBounds.at(INPUT_COLUMN, 14, 40, 3),
            ),
        ]
    )
    return controller


def format_result(values: Dict[str, FieldValue]) -> str:
    """Render a form result as JSON, tagging every value with its kind."""
    return json.dumps(
        {
            name: {"kind": value.kind.value, "value": value.value}
            for name, value in values.items()
        },
        ensure_ascii=False,
        default=str,
        indent=2,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the demo form."""
    parser = argparse.ArgumentParser(description="termform - terminal form demo")
    parser.add_argument(
        "--date-only", action="store_true", help="Ask for a date without a time"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level",
    )
    parser.add_argument(
        "--log-file", help="Write logs to this file (the form owns the terminal)"
    )
    add_warning_arguments(parser)
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)
    configure_warnings_from_args(args)

    try:
        settings = FormSettings.from_env()
    except ConfigurationError as e:
        log_configuration_warning(logger, "read settings", f"{e}; using defaults")
        settings = FormSettings()

    try:
        with open_terminal() as driver:
            screen = ScreenIO(driver)
            values = build_demo_form(screen, args.date_only, settings).execute()
    except TermFormError as e:
        logger.error(f"Form failed: {e}")
        print(f"termform: {e}", file=sys.stderr)
        return 1

    if not values:
        print("Cancelled.")
        return 0
    print(format_result(values))
    return 0


if __name__ == "__main__":
    sys.exit(main())

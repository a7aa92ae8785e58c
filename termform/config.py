"""Form settings, overridable through ``TERMFORM_*`` environment variables."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


@dataclass
class FormSettings:
    """Settings shared by every form a controller runs."""

    status_interval: float = 0.25
    """Seconds between status-line polls."""

    template_char: str = "_"
    """Filler painted in unused field cells."""

    beep_on_reject: bool = True
    """Beep when a field refuses a keystroke."""

    title_marker: str = "» "
    """Prefix of the form title."""

    legend_width: int = 15
    """Columns per function-key legend entry."""

    def __post_init__(self) -> None:
        if self.status_interval <= 0:
            raise ConfigurationError(
                "status_interval must be positive",
                context={"status_interval": self.status_interval},
            )
        if len(self.template_char) != 1:
            raise ConfigurationError(
                "template_char must be a single character",
                context={"template_char": self.template_char},
            )
        if self.legend_width < 4:
            raise ConfigurationError(
                "legend_width is too small", context={"legend_width": self.legend_width}
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FormSettings":
        """
        Build settings from environment variables.

        Reads ``TERMFORM_STATUS_INTERVAL``, ``TERMFORM_TEMPLATE_CHAR`` and
        ``TERMFORM_BEEP``; unset variables keep their defaults.

        Raises:
            ConfigurationError: If a variable holds an unusable value
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        interval = env.get("TERMFORM_STATUS_INTERVAL")
        if interval is not None:
            try:
                kwargs["status_interval"] = float(interval)
            except ValueError as e:
                raise ConfigurationError(
                    "TERMFORM_STATUS_INTERVAL must be a number",
                    context={"value": interval},
                    original_exception=e,
                ) from e
        template = env.get("TERMFORM_TEMPLATE_CHAR")
        if template is not None:
            kwargs["template_char"] = template
        beep = env.get("TERMFORM_BEEP")
        if beep is not None:
            word = beep.strip().lower()
            if word not in _TRUE_WORDS | _FALSE_WORDS:
                raise ConfigurationError(
                    "TERMFORM_BEEP must be true or false", context={"value": beep}
                )
            kwargs["beep_on_reject"] = word in _TRUE_WORDS
        settings = cls(**kwargs)
        logger.debug(f"Form settings: {settings}")
        return settings

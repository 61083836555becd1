"""Logging for the temporal table engine: one named logger writing to the console."""

import logging
from enum import StrEnum

from src import settings


class ConsoleFormat(StrEnum):
    """ANSI escape sequences used for console logging.

    <https://en.wikipedia.org/wiki/ANSI_escape_code#Select_Graphic_Rendition_parameters>
    """

    RESET = "\033[0m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    LIGHT_GREY = "\033[37m"
    BOLD_RED = "\033[1;41;30m"


class ConsoleFormatter(logging.Formatter):
    """`time - logger - LEVEL - message`, wrapped in a per-level colour when enabled."""

    FORMAT = "{asctime} - {name} - {levelname} - {message}"
    COLOURS = {
        logging.DEBUG: ConsoleFormat.LIGHT_GREY,
        logging.INFO: ConsoleFormat.BLUE,
        logging.WARNING: ConsoleFormat.YELLOW,
        logging.ERROR: ConsoleFormat.RED,
        logging.CRITICAL: ConsoleFormat.BOLD_RED,
    }

    def __init__(self, colour: bool = False) -> None:
        super().__init__(self.FORMAT, style="{", validate=True)
        self.colour = colour

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        if not self.colour:
            return line
        return f"{self.COLOURS.get(record.levelno, ConsoleFormat.RESET)}{line}{ConsoleFormat.RESET}"


def build_console_handler(
    level: str = settings.LOG_LEVEL, colour: bool = settings.LOG_COLOUR_ENABLED
) -> logging.Handler:
    """Stream handler at `level` using the console formatter."""
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(ConsoleFormatter(colour=colour))
    return handler


LOGGER = logging.getLogger(settings.LOGGER_NAME)
LOGGER.setLevel(settings.LOG_LEVEL)
LOGGER.addHandler(build_console_handler())

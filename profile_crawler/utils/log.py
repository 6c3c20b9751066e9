"""
Logging configuration for the crawler.

The console handler is a ``colorlog`` handler: the level prefix takes the
level colour, and the ``[TAG]`` markers the crawler writes into its
messages (``[OK]``, ``[ERR]``, ``[GEN]`` ...) get a colour of their own.
An optional file handler records everything at DEBUG together with the
name of the worker thread that emitted each line.
"""

import logging
import re
from pathlib import Path

import colorlog
from colorlog.escape_codes import escape_codes, parse_colors

log = logging.getLogger("profile-crawler")

_CONSOLE_FMT = "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s"
_CONSOLE_DATEFMT = "%H:%M:%S"
_FILE_FMT = "%(asctime)s [%(levelname)s] (%(threadName)s) %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

_LEVEL_COLOURS: dict[str, str] = {
    "DEBUG":    "cyan",
    "INFO":     "green",
    "WARNING":  "yellow",
    "ERROR":    "red",
    "CRITICAL": "bold_red",
}

# Message tag -> colorlog colour name
_TAG_COLOURS: dict[str, str] = {
    "[OK]":    "bold_green",
    "[ERR]":   "bold_red",
    "[SAVE]":  "green",
    "[SKIP]":  "light_black",
    "[QUEUE]": "white",
    "[PAGE]":  "cyan",
    "[GEN]":   "bold_purple",
    "[DONE]":  "bold_blue",
}
_TAG_RE = re.compile("|".join(re.escape(tag) for tag in _TAG_COLOURS))


def colour_tags(msg: str) -> str:
    """Wrap every known ``[TAG]`` in *msg* in its colour escape codes."""
    return _TAG_RE.sub(
        lambda m: parse_colors(_TAG_COLOURS[m.group(0)]) + m.group(0) + escape_codes["reset"],
        msg,
    )


class _TagFormatter(colorlog.ColoredFormatter):
    """``ColoredFormatter`` that also colours the crawler's message tags."""

    def format(self, record: logging.LogRecord) -> str:
        return colour_tags(super().format(record))


def _reset_handlers() -> None:
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()


def setup_logging(debug: bool = False, log_file: str | None = None) -> None:
    """Configure the ``profile-crawler`` logger.

    Parameters
    ----------
    debug : bool
        Show DEBUG-level output on the console (default is INFO).
    log_file : str | None
        If given, also write every message, DEBUG included, to this path.
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(logging.DEBUG if log_file else level)
    _reset_handlers()

    console = colorlog.StreamHandler()
    console.setFormatter(_TagFormatter(
        _CONSOLE_FMT, datefmt=_CONSOLE_DATEFMT, log_colors=_LEVEL_COLOURS
    ))
    console.setLevel(level)
    log.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_FMT, datefmt=_FILE_DATEFMT))
        log.addHandler(fh)
        log.info("Logging to file: %s", log_path.resolve())

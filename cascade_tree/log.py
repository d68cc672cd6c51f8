"""Logging for cascade_tree."""

import os
from datetime import datetime
from typing import Dict, Optional, Union

from rich.console import Console
from typing_extensions import Literal

from .file_path import cascade_tree_dir
from .version import __version__ as version

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogValue = Union[int, LogLevel]

_level_value = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

_level_name = {v: k for k, v in _level_value.items()}
_level_print_style = {
    "DEBUG": "DEBUG",
    "INFO": "[cyan]INFO[/cyan]",
    "WARNING": "[yellow]WARNING[/yellow]",
    "ERROR": "[bold red]ERROR[/bold red]",
    "CRITICAL": "[bold underline red]CRITICAL[/bold underline red]",
}

DEFAULT_LEVEL = "INFO"


def _get_level_int(level: LogValue) -> int:
    """Get the integer corresponding to the level string."""
    if isinstance(level, int):
        return level

    level_upper = level.upper()
    if level_upper not in _level_value:
        raise ValueError(
            f"logging level {level_upper} not supported, must be "
            "'DEBUG', 'INFO', 'WARNING', 'ERROR', or 'CRITICAL'"
        )
    return _level_value[level_upper]


# pylint: disable=too-few-public-methods
class LogHandler:
    """Write log records at or above a level to a rich console."""

    def __init__(
        self,
        console: Console,
        level: LogValue,
        fname: Optional[str] = None,
    ):
        self.level = _get_level_int(level)
        self.console = console
        self.fname = fname
        self.back_up_count = 10
        self.max_bytes = 1000000
        self.is_rotating = True
        self._stamped_hour = None

    def handle(self, level: int, level_name: str, message: str, stamp: bool = False) -> None:
        """Output a message when its level passes the handler threshold."""
        if level < self.level:
            return
        if self.fname is not None and self.is_rotating:
            try:
                if self.should_roll_over(message):
                    self.do_roll_over()
            except OSError as error:
                self.console.log(_level_print_style["ERROR"], f"Fail to rollover {error}", sep=": ")
        if stamp:
            hour = datetime.now().strftime("%Y-%m-%d-%H")
            if hour != self._stamped_hour:
                self._stamped_hour = hour
                self.console.log(f"{hour}, cascade_tree {version}\n")
        self.console.log(_level_print_style.get(level_name, "unknown"), message, sep=": ")

    @staticmethod
    def rotation_filename(name: str, counter: int) -> str:
        """Return ``<root>_<counter><ext>`` for the given log file name."""
        root, ext = os.path.splitext(name)
        return f"{root}_{counter}{ext}"

    def should_roll_over(self, message: str) -> bool:
        """Whether writing ``message`` would push the log file past ``max_bytes``."""
        if self.max_bytes <= 0 or not os.path.isfile(self.fname):
            return False
        return os.path.getsize(self.fname) + len(message) >= self.max_bytes

    def do_roll_over(self) -> None:
        """Shift ``log_1 .. log_{n-1}`` up by one and move the live file to ``log_1``."""
        if self.back_up_count <= 0:
            return
        self.console.file.close()
        for i in range(self.back_up_count - 1, 0, -1):
            src = self.rotation_filename(self.fname, i)
            dst = self.rotation_filename(self.fname, i + 1)
            if os.path.isfile(src):
                if os.path.isfile(dst):
                    os.remove(dst)
                os.rename(src, dst)
        first = self.rotation_filename(self.fname, 1)
        if os.path.isfile(first):
            os.remove(first)
        os.rename(self.fname, first)
        # pylint: disable=consider-using-with
        self.console.file = open(self.fname, "a", encoding="utf-8")


class Logger:
    """Small logger dispatching to named handlers ("console", "file")."""

    log_to_file = True

    def __init__(self):
        self.handlers: Dict[str, LogHandler] = {}

    def _log(self, level: int, level_name: str, message: str) -> None:
        for handler_type, handler in self.handlers.items():
            if handler_type == "file":
                if not self.log_to_file:
                    continue
                handler.handle(level, level_name, message, stamp=True)
            else:
                handler.handle(level, level_name, message)

    def log(self, level: LogValue, message: str, *args) -> None:
        """Log (message) % (args) with given level"""
        if isinstance(level, str):
            level_name = level.upper()
            level = _get_level_int(level)
        else:
            level_name = _level_name.get(level, "unknown")
        self._log(level, level_name, message % args)

    def debug(self, message: str, *args) -> None:
        """Log (message) % (args) at debug level"""
        self._log(_level_value["DEBUG"], "DEBUG", message % args)

    def info(self, message: str, *args) -> None:
        """Log (message) % (args) at info level"""
        self._log(_level_value["INFO"], "INFO", message % args)

    def warning(self, message: str, *args) -> None:
        """Log (message) % (args) at warning level"""
        self._log(_level_value["WARNING"], "WARNING", f"[white]{message % args}[/white]")

    def error(self, message: str, *args) -> None:
        """Log (message) % (args) at error level"""
        self._log(_level_value["ERROR"], "ERROR", f"[white]{message % args}[/white]")

    def critical(self, message: str, *args) -> None:
        """Log (message) % (args) at critical level"""
        self._log(_level_value["CRITICAL"], "CRITICAL", f"[white]{message % args}[/white]")


log = Logger()


def set_logging_level(level: LogValue = DEFAULT_LEVEL) -> None:
    """Set console logging level priority.
    Parameters
    ----------
    level : str
        The lowest priority level of logging messages to display. One of ``{'DEBUG', 'INFO',
        'WARNING', 'ERROR', 'CRITICAL'}`` (listed in increasing priority).
    """
    if "console" in log.handlers:
        log.handlers["console"].level = _get_level_int(level)


def set_logging_console(stderr: bool = False) -> None:
    """Set stdout or stderr as console output
    Parameters
    ----------
    stderr : bool
        If False, logs are directed to stdout, otherwise to stderr.
    """
    previous_level = DEFAULT_LEVEL
    if "console" in log.handlers:
        previous_level = log.handlers["console"].level
    log.handlers["console"] = LogHandler(Console(stderr=stderr, log_path=False), previous_level)


def set_logging_file(
    fname: str,
    filemode: str = "a",
    level: LogValue = DEFAULT_LEVEL,
    back_up_count: int = 10,
    max_bytes: int = 1000000,
) -> None:
    """Set a file to write log to, independently from the console output.
    Parameters
    ----------
    fname : str
        Path to file to direct the output to.
    filemode : str
        'w' or 'a', defining if the file should be overwritten or appended.
    level : str
        One of ``{'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}``.
    back_up_count : int
        How many backup log files are preserved when rotating log files
    max_bytes : int
        Maximum log file size in bytes before a log rotation is performed
    """
    if filemode not in ("w", "a"):
        raise ValueError("filemode must be either 'w' or 'a'")

    previous = log.handlers.pop("file", None)
    if previous is not None:
        try:
            previous.console.file.close()
        except OSError as error:
            log.warning("Log file could not be closed: %s", error)

    try:
        # pylint: disable=consider-using-with
        file = open(fname, filemode, encoding="utf-8")
    except OSError:
        log.warning("File %s could not be opened. Logging to file disabled.", fname)
        return

    handler = LogHandler(Console(file=file, log_path=False), level, fname)
    handler.back_up_count = back_up_count
    handler.max_bytes = max_bytes
    log.handlers["file"] = handler


def toggle_rotation(rotate: bool) -> None:
    """Enable or disable log file rotation."""
    if "file" in log.handlers:
        log.handlers["file"].is_rotating = rotate


set_logging_console()

log_dir = cascade_tree_dir + "logs"
try:
    os.makedirs(log_dir, exist_ok=True)
except OSError as err:
    log.warning("Could not setup file logging: %s", err)

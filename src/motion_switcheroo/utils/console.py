"""
Console and Logging Utilities.

All user-facing output goes through the standard `logging` module rendered by
`rich`. A proxy object wraps the active `rich.console.Console` so the output
destination can be swapped at runtime (for example to an in-memory buffer in
tests) while modules keep importing the same `console` reference.

Attributes:
    console (_ConsoleProxy): Stable reference to the active Rich Console.
    SUCCESS_LEVEL_NUM (int): Custom logging level between INFO and WARNING.
"""

import io
import logging
from contextlib import contextmanager
from typing import Any, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "code": "bold magenta",
    # Suggestion severities
    "severity.low": "dim",
    "severity.medium": "yellow",
    "severity.high": "bold red",
    "severity.critical": "bold white on red",
  }
)


class _ConsoleProxy:
  """
  Forwards printing to a swappable `rich` Console backend.

  Swapping the backend also re-binds the root logger's `RichHandler` so that
  `logging.info(...)` follows the console to its new destination.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._level = logging.INFO
    self._configure_logging()

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and updates logging handlers.

    Args:
        new_console (Console): The Rich Console instance to use.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Restores a fresh standard output console."""
    self._backend = Console(theme=_THEME)
    self._configure_logging()

  def set_level(self, level: int) -> None:
    """
    Changes the root logging threshold (e.g. `logging.DEBUG` for `--verbose`).

    Args:
        level (int): A standard logging level.
    """
    self._level = level
    logging.getLogger().setLevel(level)

  def _configure_logging(self) -> None:
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    root_logger.setLevel(self._level)
    root_logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console output and logging to `new_console`.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Resets logging and console output to standard output."""
  console.reset()


def get_console() -> Console:
  """
  Returns:
      Console: The currently active Rich Console backend.
  """
  return console.backend


@contextmanager
def capture_console(width: int = 120) -> Iterator[Console]:
  """
  Temporarily routes all console output into a recording buffer.

  Usage:
      with capture_console() as buf:
          log_info("hello")
      assert "hello" in buf.export_text()

  Args:
      width (int): Render width of the recording console.

  Yields:
      Console: The recording console.
  """
  previous = console.backend
  recorder = Console(file=io.StringIO(), record=True, width=width, theme=_THEME)
  set_console(recorder)
  try:
    yield recorder
  finally:
    set_console(previous)


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): The message content. May include rich markup.
  """
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  logging.error(f"❌ {msg}", extra={"markup": True})

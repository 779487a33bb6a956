"""
External Pretty-Printer.

Pipes generated code through ``prettier`` on stdin. The formatter is an
optional collaborator: a missing binary, a non-zero exit or a timeout raises
`FormatterError`, which `format_code_or_fallback` turns into a logged warning
and the unformatted text.
"""

import logging
import subprocess
from typing import List, Optional, Sequence

from motion_switcheroo.errors import FormatterError

logger = logging.getLogger(__name__)

PRETTIER_OPTIONS: List[str] = [
  "--semi",
  "--single-quote",
  "--trailing-comma=es5",
  "--tab-width=2",
  "--print-width=100",
  "--bracket-spacing",
  "--arrow-parens=avoid",
  "--end-of-line=lf",
  "--jsx-single-quote",
]


def build_command(command: Sequence[str], parser: str) -> List[str]:
  """
  Args:
      command (Sequence[str]): Base invocation (e.g. ``["prettier"]`` or
          ``["npx", "prettier"]``).
      parser (str): Prettier parser name (``babel``, ``typescript``, ``vue``).

  Returns:
      List[str]: Full argument vector.
  """
  return [*command, f"--parser={parser}", *PRETTIER_OPTIONS]


def format_code(code: str, parser: str, command: Optional[Sequence[str]] = None, timeout: float = 10.0) -> str:
  """
  Formats `code` with the external pretty-printer.

  Args:
      code (str): Source text.
      parser (str): Prettier parser name.
      command (Optional[Sequence[str]]): Base invocation; ``["prettier"]`` by default.
      timeout (float): Seconds to wait for the process.

  Returns:
      str: Formatted text.

  Raises:
      FormatterError: If the formatter is missing, fails or times out.
  """
  argv = build_command(command or ["prettier"], parser)
  try:
    proc = subprocess.run(argv, input=code, capture_output=True, text=True, timeout=timeout, check=False)
  except FileNotFoundError as e:
    raise FormatterError(f"Formatter not found: {argv[0]}", {"command": argv}) from e
  except subprocess.TimeoutExpired as e:
    raise FormatterError(f"Formatter timed out after {timeout}s", {"command": argv}) from e
  except OSError as e:
    raise FormatterError(f"Formatter could not start: {e}", {"command": argv}) from e

  if proc.returncode != 0:
    raise FormatterError(
      f"Formatter exited with status {proc.returncode}",
      {"command": argv, "stderr": proc.stderr.strip()},
    )
  return proc.stdout


def format_code_or_fallback(
  code: str, parser: str, command: Optional[Sequence[str]] = None, timeout: float = 10.0
) -> str:
  """
  Like `format_code`, but returns `code` unchanged when formatting fails.
  """
  try:
    return format_code(code, parser, command=command, timeout=timeout)
  except FormatterError as e:
    logger.warning(f"Formatting skipped: {e.message}")
    return code

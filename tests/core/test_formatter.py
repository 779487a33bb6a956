"""
Tests for the External Pretty-Printer Wrapper.

Verifies:
1. The argument vector passed to the formatter.
2. Missing binary, timeout and non-zero exit raise FormatterError.
3. The fallback variant returns the input and logs a warning.
"""

import logging
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from motion_switcheroo.core.formatter import build_command, format_code, format_code_or_fallback
from motion_switcheroo.errors import FormatterError

RUN = "motion_switcheroo.core.formatter.subprocess.run"


def test_build_command():
  argv = build_command(["npx", "prettier"], "typescript")
  assert argv[:3] == ["npx", "prettier", "--parser=typescript"]
  assert "--single-quote" in argv


def test_format_code_success():
  with patch(RUN, return_value=MagicMock(returncode=0, stdout="formatted\n", stderr="")) as mock_run:
    assert format_code("x", "babel") == "formatted\n"

  args, kwargs = mock_run.call_args
  assert args[0][:2] == ["prettier", "--parser=babel"]
  assert kwargs["input"] == "x"
  assert kwargs["timeout"] == 10.0


def test_missing_binary():
  with patch(RUN, side_effect=FileNotFoundError()):
    with pytest.raises(FormatterError, match="Formatter not found: prettier"):
      format_code("x", "babel")


def test_timeout():
  with patch(RUN, side_effect=subprocess.TimeoutExpired(cmd="prettier", timeout=1)):
    with pytest.raises(FormatterError, match="timed out"):
      format_code("x", "babel", timeout=1)


def test_nonzero_exit():
  with patch(RUN, return_value=MagicMock(returncode=2, stdout="", stderr="SyntaxError\n")):
    with pytest.raises(FormatterError) as exc:
      format_code("x", "vue")
  assert exc.value.details["stderr"] == "SyntaxError"
  assert exc.value.code == "FORMATTER_ERROR"


def test_fallback_returns_input(caplog):
  with patch(RUN, side_effect=FileNotFoundError()):
    with caplog.at_level(logging.WARNING):
      assert format_code_or_fallback("raw code", "babel") == "raw code"
  assert "Formatting skipped" in caplog.text

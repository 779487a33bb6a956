"""
Tests for Console and Logging Utilities.
"""

import logging

from rich.logging import RichHandler

from motion_switcheroo.utils.console import (
  SUCCESS_LEVEL_NUM,
  capture_console,
  console,
  get_console,
  log_error,
  log_info,
  log_success,
  log_warning,
)


def test_capture_routes_logging(captured_console):
  log_info("parsing started")
  log_success("done")
  log_warning("careful")
  log_error("broken")
  output = captured_console.export_text()
  assert "parsing started" in output
  assert "done" in output
  assert "careful" in output
  assert "broken" in output


def test_capture_restores_previous_backend():
  before = get_console()
  with capture_console() as recorder:
    assert get_console() is recorder
    console.print("inside")
  assert get_console() is before
  assert "inside" in recorder.export_text()


def test_single_rich_handler_is_installed():
  with capture_console():
    handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
    assert len(handlers) == 1


def test_success_level_is_registered():
  assert logging.getLevelName(SUCCESS_LEVEL_NUM) == "SUCCESS"


def test_set_level_filters_debug(captured_console):
  console.set_level(logging.INFO)
  logging.getLogger("motion_switcheroo.test").debug("hidden detail")
  console.set_level(logging.DEBUG)
  logging.getLogger("motion_switcheroo.test").debug("visible detail")
  console.set_level(logging.INFO)
  output = captured_console.export_text()
  assert "hidden detail" not in output
  assert "visible detail" in output

"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Global registry isolation to prevent tests with custom adapters from leaking.
- Console capture for asserting on log output.
- Engine configuration with the external formatter switched off.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'motion_switcheroo' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Force load of default adapters so they provide the "clean state" baseline.
import motion_switcheroo.frameworks  # noqa: E402, F401
from motion_switcheroo.config import GenerationOptions, RuntimeConfig  # noqa: E402
from motion_switcheroo.frameworks.base import _ADAPTER_REGISTRY  # noqa: E402
from motion_switcheroo.utils.console import capture_console  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_framework_registry():
  """
  Ensures that modifications to the framework adapter registry
  (adding custom frameworks for tests) do not leak between tests.
  """
  original_registry = _ADAPTER_REGISTRY.copy()
  yield
  _ADAPTER_REGISTRY.clear()
  _ADAPTER_REGISTRY.update(original_registry)


@pytest.fixture
def captured_console():
  """Routes console and logging output into a recording buffer."""
  with capture_console(width=200) as recorder:
    yield recorder


@pytest.fixture
def make_config():
  """
  Builds a `RuntimeConfig` that never shells out to the pretty-printer.
  """

  def _make(**kwargs) -> RuntimeConfig:
    generation = kwargs.pop("generation", {})
    options = GenerationOptions(**{"use_formatter": False, **generation})
    return RuntimeConfig(generation=options, **kwargs)

  return _make

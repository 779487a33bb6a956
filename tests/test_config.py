"""
Tests for Configuration Loading.

Verifies:
1. Defaults when no pyproject.toml exists.
2. TOML settings from ``[tool.motion_switcheroo]`` and explicit overrides.
3. Framework validation.
4. CLI key=value parsing and focus flags.
"""

import textwrap

import pytest
from pydantic import ValidationError

from motion_switcheroo.config import OptimizationFlags, RuntimeConfig, parse_cli_key_values
from motion_switcheroo.enums import Framework
from motion_switcheroo.errors import UnsupportedFrameworkError


def _write_pyproject(path, body):
  (path / "pyproject.toml").write_text(textwrap.dedent(body), encoding="utf-8")


def test_defaults_without_pyproject(tmp_path):
  config = RuntimeConfig.load(search_path=tmp_path)
  assert config.framework == "react"
  assert config.target is None
  assert config.target_framework == Framework.REACT
  assert config.typescript is False
  assert config.generation.use_formatter is True
  assert config.formatter_command == ["prettier"]


def test_load_from_pyproject(tmp_path):
  _write_pyproject(
    tmp_path,
    """
    [tool.motion_switcheroo]
    framework = "vue"
    target = "react"
    typescript = true
    optimize_output = true
    formatter_command = "npx prettier"
    formatter_timeout = 3
    plugins = ["decorators"]

    [tool.motion_switcheroo.optimization]
    bundle_size = false

    [tool.motion_switcheroo.generation]
    comments = false
    """,
  )
  nested = tmp_path / "src" / "components"
  nested.mkdir(parents=True)

  config = RuntimeConfig.load(search_path=nested)
  assert config.source_framework == Framework.VUE
  assert config.target_framework == Framework.REACT
  assert config.typescript is True
  assert config.optimize_output is True
  assert config.formatter_command == ["npx", "prettier"]
  assert config.formatter_timeout == 3.0
  assert config.plugins == ["decorators"]
  assert config.optimization.bundle_size is False
  assert config.optimization.performance is True
  assert config.generation.comments is False


def test_explicit_arguments_override_pyproject(tmp_path):
  _write_pyproject(
    tmp_path,
    """
    [tool.motion_switcheroo]
    framework = "vue"
    typescript = true

    [tool.motion_switcheroo.generation]
    comments = false
    minify = true
    """,
  )
  config = RuntimeConfig.load(
    framework="js",
    typescript=False,
    optimization=OptimizationFlags(accessibility=False),
    generation={"minify": False},
    search_path=tmp_path,
  )
  assert config.framework == "js"
  assert config.typescript is False
  assert config.optimization.accessibility is False
  assert config.generation.minify is False
  assert config.generation.comments is False


def test_unreadable_pyproject_is_ignored(tmp_path, caplog):
  (tmp_path / "pyproject.toml").write_text("not = [valid", encoding="utf-8")
  config = RuntimeConfig.load(search_path=tmp_path)
  assert config.framework == "react"
  assert "Ignoring unreadable config" in caplog.text


def test_load_rejects_unknown_framework(tmp_path):
  with pytest.raises(UnsupportedFrameworkError):
    RuntimeConfig.load(framework="svelte", search_path=tmp_path)
  with pytest.raises(UnsupportedFrameworkError):
    RuntimeConfig.load(target="angular", search_path=tmp_path)


def test_validator_normalizes_and_rejects():
  assert RuntimeConfig(framework=" VUE ").framework == "vue"
  with pytest.raises(ValidationError, match="Unknown framework"):
    RuntimeConfig(framework="svelte")


@pytest.mark.parametrize(
  "focus, expected",
  [
    (None, (True, True, True)),
    ([], (True, True, True)),
    (["performance"], (True, False, False)),
    (["bundle-size", "Accessibility"], (False, True, True)),
  ],
)
def test_from_focus(focus, expected):
  flags = OptimizationFlags.from_focus(focus)
  assert (flags.performance, flags.accessibility, flags.bundle_size) == expected


def test_parse_cli_key_values(caplog):
  parsed = parse_cli_key_values(["minify=true", "comments=False", "timeout=5", "ratio=0.5", "name=fade", "broken"])
  assert parsed == {"minify": True, "comments": False, "timeout": 5, "ratio": 0.5, "name": "fade"}
  assert "Ignoring invalid config format: 'broken'" in caplog.text
  assert parse_cli_key_values(None) == {}

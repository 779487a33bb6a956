"""
Tests for Package Importability and the Module Entry Point.

Each check runs in a fresh interpreter so that no module is already cached
by the test session. This catches import cycles that only surface when a
submodule is the first thing imported.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from motion_switcheroo.templates import TemplateStore

SRC_PATH = Path(__file__).parent.parent / "src"

ENTRY_MODULES = [
  "motion_switcheroo",
  "motion_switcheroo.config",
  "motion_switcheroo.core.parser",
  "motion_switcheroo.core.rewriter",
  "motion_switcheroo.core.context",
  "motion_switcheroo.frameworks",
  "motion_switcheroo.frameworks.base",
  "motion_switcheroo.templates",
  "motion_switcheroo.optimizers",
  "motion_switcheroo.cli.__main__",
]


def _run(args, cwd=None):
  env = os.environ.copy()
  env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_PATH), env.get("PYTHONPATH")]))
  return subprocess.run([sys.executable, *args], capture_output=True, text=True, env=env, cwd=cwd)


@pytest.mark.parametrize("module", ENTRY_MODULES)
def test_module_imports_first_in_fresh_interpreter(module):
  result = _run(["-c", f"import {module}"])
  assert result.returncode == 0, result.stderr


def test_config_then_parser_in_fresh_interpreter():
  result = _run(["-c", "import motion_switcheroo.config, motion_switcheroo.core.parser"])
  assert result.returncode == 0, result.stderr


def test_python_m_version():
  result = _run(["-m", "motion_switcheroo", "--version"])
  assert result.returncode == 0, result.stderr
  assert "0.1.0" in result.stdout


def test_python_m_templates_show():
  result = _run(["-m", "motion_switcheroo", "templates", "--show", "js-fade-in"])
  assert result.returncode == 0, result.stderr
  assert result.stdout == TemplateStore().get_template("js-fade-in").code + "\n"


def test_python_m_scaffold(tmp_path):
  out_file = tmp_path / "FadeBox.jsx"
  result = _run(["-m", "motion_switcheroo", "scaffold", "FadeBox", "--pattern", "fade-in", "--out", str(out_file)], cwd=tmp_path)
  assert result.returncode == 0, result.stderr
  code = out_file.read_text(encoding="utf-8")
  assert "const FadeBox = () => {" in code
  assert "<motion.div initial={{ opacity: 0 }} animate={{ opacity: 1 }} transition={{ duration: 0.3 }}>" in code


def test_python_m_generate_from_file(tmp_path):
  src = tmp_path / "Slide.js"
  src.write_text("import { animate } from 'motion';\nanimate('.box', { x: 100 });\n", encoding="utf-8")
  result = _run(["-m", "motion_switcheroo", "generate", str(src), "--framework", "js", "--config", "use_formatter=false"], cwd=tmp_path)
  assert result.returncode == 0, result.stderr
  assert "animate(document.querySelector('.box')" in result.stdout


def test_python_m_usage_error():
  result = _run(["-m", "motion_switcheroo", "generate"])
  assert result.returncode == 2
  assert "generate requires a PATH, --template or --pattern" in result.stderr

"""
Analyze and Optimize Command Handlers.

Both commands work on already-emitted code: `analyze` reports suggestions and
the bundle cost estimate, `optimize` rewrites the file with the selected
analyzers.
"""

import json
from pathlib import Path
from typing import List, Optional

from rich.table import Table

from motion_switcheroo.config import OptimizationFlags
from motion_switcheroo.enums import Framework
from motion_switcheroo.errors import MotionSwitcherooError
from motion_switcheroo.optimizers import OptimizerSuite, estimate_cost
from motion_switcheroo.utils.console import console, log_error, log_success


def _read(path: Path) -> Optional[str]:
  if not path.is_file():
    log_error(f"Input not found: {path}")
    return None
  with open(path, "rt", encoding="utf-8") as f:
    return f.read()


def handle_analyze(input_path: Path, framework: str, focus: Optional[List[str]], as_json: bool = False) -> int:
  """
  Handles the 'analyze' command.

  Args:
      input_path: Generated code file.
      framework: Framework the code targets.
      focus: Analyzer selection; all when empty.
      as_json: Print a JSON document instead of a table.

  Returns:
      int: Exit code.
  """
  code = _read(input_path)
  if code is None:
    return 1
  try:
    fw = Framework.resolve(framework)
  except MotionSwitcherooError as e:
    log_error(e.message)
    return 1

  suggestions = OptimizerSuite(OptimizationFlags.from_focus(focus)).analyze(code, fw)
  cost = estimate_cost(code, fw)

  if as_json:
    payload = {
      "file": str(input_path),
      "framework": fw.value,
      "suggestions": [s.model_dump(mode="json") for s in suggestions],
      "cost": cost.model_dump(),
    }
    print(json.dumps(payload, indent=2))
    return 0

  if not suggestions:
    log_success(f"No issues found in [path]{input_path}[/path]")
  else:
    table = Table(title=f"Analysis of {input_path.name}")
    table.add_column("Kind", style="cyan")
    table.add_column("Severity", justify="center")
    table.add_column("Line", justify="right")
    table.add_column("Message")
    table.add_column("Fix", style="dim")
    for s in suggestions:
      severity = s.severity.value
      table.add_row(
        s.kind.value,
        f"[severity.{severity}]{severity}[/]",
        str(s.line or ""),
        s.message,
        s.fix or "",
      )
    console.print(table)

  breakdown = ", ".join(f"{k}={v}" for k, v in cost.breakdown.items()) or "none"
  console.print(f"\n[bold]Estimated bundle cost:[/bold] {cost.total} bytes ({breakdown})")
  return 0


def handle_optimize(input_path: Path, output_path: Optional[Path], framework: str, focus: Optional[List[str]]) -> int:
  """
  Handles the 'optimize' command.

  Args:
      input_path: Generated code file.
      output_path: Destination; printed when None.
      framework: Framework the code targets.
      focus: Analyzer selection; all when empty.

  Returns:
      int: Exit code.
  """
  code = _read(input_path)
  if code is None:
    return 1
  try:
    optimized = OptimizerSuite(OptimizationFlags.from_focus(focus)).optimize(code, framework)
  except MotionSwitcherooError as e:
    log_error(e.message)
    return 1

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      f.write(optimized)
    log_success(f"Optimized: [path]{input_path}[/path] -> [path]{output_path}[/path]")
  else:
    print(optimized)
  return 0

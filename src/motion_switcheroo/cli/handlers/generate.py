"""
Generate and Scaffold Command Handlers.

`generate` runs the engine on a component file (or a packaged template or
animation pattern) and writes or prints the result. `scaffold` emits a
starter component animating a single element.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.table import Table

from motion_switcheroo.config import OptimizationFlags, RuntimeConfig
from motion_switcheroo.core.engine import GenerationResult, MotionEngine
from motion_switcheroo.core.generator import scaffold_component
from motion_switcheroo.enums import Framework
from motion_switcheroo.errors import MotionSwitcherooError
from motion_switcheroo.templates import PatternLibrary, TemplateStore
from motion_switcheroo.templates.patterns import DEFAULT_COMPONENT_NAME
from motion_switcheroo.utils.console import console, log_error, log_info, log_success


def handle_generate(
  input_path: Optional[Path],
  output_path: Optional[Path],
  framework: Optional[str],
  target: Optional[str],
  typescript: Optional[bool],
  optimize: bool,
  focus: Optional[List[str]],
  generation: Dict[str, Any],
  template_id: Optional[str] = None,
  component_name: Optional[str] = None,
  pattern_ids: Optional[List[str]] = None,
) -> int:
  """
  Handles the 'generate' command.

  Args:
      input_path: Component source file. Ignored when `template_id` or
          `pattern_ids` is set.
      output_path: Where to write the generated code; printed when None.
      framework: Source framework override.
      target: Target framework override.
      typescript: TypeScript mode override.
      optimize: Rewrite the output with the optimizer suite.
      focus: Optimization areas; all when empty.
      generation: Emitter option overrides.
      template_id: Packaged template to use as input.
      component_name: Overrides the resolved component name.
      pattern_ids: Animation patterns rendered for the source framework
          (react unless given) and used as input.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  try:
    if template_id:
      template = TemplateStore().get_template(template_id)
      code = template.code
      framework = framework or template.framework.value
      typescript = template.typescript if typescript is None else typescript
      search_path = Path.cwd()
      label = f"template {template_id}"
    elif pattern_ids:
      framework = framework or Framework.REACT.value
      code = PatternLibrary().pattern_code(
        pattern_ids, framework, component_name or DEFAULT_COMPONENT_NAME, bool(typescript)
      )
      search_path = Path.cwd()
      label = f"pattern {'+'.join(pattern_ids)}"
    else:
      if input_path is None or not input_path.is_file():
        log_error(f"Input not found: {input_path}")
        return 1
      with open(input_path, "rt", encoding="utf-8") as f:
        code = f.read()
      search_path = input_path.parent
      label = str(input_path)

    config = RuntimeConfig.load(
      framework=framework,
      target=target,
      typescript=typescript,
      optimization=OptimizationFlags.from_focus(focus) if focus else None,
      generation=generation,
      optimize_output=optimize or None,
      search_path=search_path,
    )
  except MotionSwitcherooError as e:
    log_error(e.message)
    return 1

  result = MotionEngine(config).run(code, component_name=component_name)
  if not result.success:
    return 1

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      f.write(result.code)
    log_success(f"Generated: [path]{label}[/path] -> [path]{output_path}[/path]")
  else:
    print(result.code)

  _print_report(result)
  return 0


def _print_report(result: GenerationResult) -> None:
  if result.dependencies:
    log_info(f"Dependencies: {', '.join(result.dependencies)}")
  if not result.suggestions:
    return

  table = Table(title=f"Suggestions for {result.component_name}")
  table.add_column("Kind", style="cyan")
  table.add_column("Severity", justify="center")
  table.add_column("Line", justify="right")
  table.add_column("Message")

  for s in result.suggestions:
    severity = s.severity.value
    table.add_row(s.kind.value, f"[severity.{severity}]{severity}[/]", str(s.line or ""), s.message)
  console.print(table)


def build_motion_props(settings: Dict[str, Any]) -> Dict[str, Any]:
  """
  Nests dotted keys: ``{"animate.opacity": 1}`` -> ``{"animate": {"opacity": 1}}``.

  Args:
      settings (Dict[str, Any]): Flat ``key=value`` settings.

  Returns:
      Dict[str, Any]: Nested animation props.
  """
  props: Dict[str, Any] = {}
  for key, value in settings.items():
    head, *rest = key.split(".")
    if not rest:
      props[head] = value
      continue
    node = props.setdefault(head, {})
    if not isinstance(node, dict):
      node = props[head] = {}
    for part in rest[:-1]:
      node = node.setdefault(part, {})
    node[rest[-1]] = value
  return props


def handle_scaffold(
  component_name: str,
  framework: str,
  motion_settings: Dict[str, Any],
  children: Optional[str],
  typescript: bool,
  output_path: Optional[Path],
  pattern_ids: Optional[List[str]] = None,
) -> int:
  """
  Handles the 'scaffold' command.

  Args:
      component_name: Component identifier.
      framework: Target framework key.
      motion_settings: Flat ``key=value`` animation props (dotted keys nest).
      children: Element content.
      typescript: Emit TypeScript.
      output_path: Destination file; printed when None.
      pattern_ids: Animation patterns applied instead of `motion_settings`.

  Returns:
      int: Exit code.
  """
  try:
    if pattern_ids:
      code = PatternLibrary().pattern_code(pattern_ids, framework, component_name, typescript, children)
    else:
      code = scaffold_component(framework, component_name, build_motion_props(motion_settings), children, typescript)
  except MotionSwitcherooError as e:
    log_error(e.message)
    return 1

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      f.write(code)
    log_success(f"Scaffolded [code]{component_name}[/code] -> [path]{output_path}[/path]")
  else:
    print(code)
  return 0

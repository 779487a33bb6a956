"""
Catalogue Command Handlers.

Listings of the packaged templates, animation patterns and registered
frameworks.
"""

from typing import Optional

from rich.table import Table

from motion_switcheroo.enums import Framework
from motion_switcheroo.errors import MotionSwitcherooError
from motion_switcheroo.frameworks.base import available_frameworks, resolve_adapter
from motion_switcheroo.templates import PatternLibrary, TemplateFilter, TemplateStore
from motion_switcheroo.utils.console import console, log_error, log_warning


def handle_templates(
  framework: Optional[str],
  category: Optional[str],
  complexity: Optional[str],
  show_id: Optional[str] = None,
) -> int:
  """
  Handles the 'templates' command.

  Lists templates matching the filters, or prints one template's code when
  `show_id` is given.

  Returns:
      int: Exit code.
  """
  store = TemplateStore()
  try:
    if show_id:
      print(store.get_template(show_id, framework).code)
      return 0
    criteria = TemplateFilter(framework=framework, category=category, complexity=complexity)
  except MotionSwitcherooError as e:
    log_error(e.message)
    return 1
  except ValueError as e:
    log_error(f"Invalid filter: {e}")
    return 1

  matches = store.search_templates(criteria)
  if not matches:
    log_warning("No templates match the given filters.")
    return 0

  table = Table(title="Templates")
  table.add_column("ID", style="cyan")
  table.add_column("Framework")
  table.add_column("Category")
  table.add_column("Complexity")
  table.add_column("Description", style="dim")
  for t in matches:
    table.add_row(t.id, t.framework.value, t.category.value, t.complexity.value, t.description)
  console.print(table)
  return 0


def handle_frameworks() -> int:
  """
  Handles the 'frameworks' command.

  Returns:
      int: Exit code (always 0).
  """
  table = Table(title="Frameworks")
  table.add_column("Key", style="cyan")
  table.add_column("Name")
  table.add_column("Package", style="code")
  table.add_column("Extensions")

  for key in available_frameworks():
    adapter = resolve_adapter(key)
    extensions = f"{adapter.file_extension(False)} / {adapter.file_extension(True)}"
    table.add_row(key, adapter.display_name, adapter.package, extensions)
  console.print(table)
  return 0


def handle_patterns(
  framework: Optional[str],
  category: Optional[str],
  complexity: Optional[str],
  query: Optional[str] = None,
  show_id: Optional[str] = None,
) -> int:
  """
  Handles the 'patterns' command.

  Lists animation patterns matching the filters and search term, or prints
  one pattern rendered as a component for `framework` (react by default).

  Returns:
      int: Exit code.
  """
  library = PatternLibrary()
  try:
    if show_id:
      print(library.pattern_code(show_id, framework or Framework.REACT.value))
      return 0
    matches = library.filter_patterns(category=category, framework=framework, complexity=complexity)
  except MotionSwitcherooError as e:
    log_error(e.message)
    return 1

  if query:
    found = {p.id for p in library.search_patterns(query)}
    matches = [p for p in matches if p.id in found]
  if not matches:
    log_warning("No patterns match the given filters.")
    return 0

  table = Table(title="Animation Patterns")
  table.add_column("ID", style="cyan")
  table.add_column("Category")
  table.add_column("Complexity")
  table.add_column("Frameworks")
  table.add_column("Score", justify="right")
  table.add_column("Description", style="dim")
  for p in matches:
    score = library.performance_score(p.id).score
    frameworks = ", ".join(f.value for f in p.frameworks)
    table.add_row(p.id, p.category.value, p.complexity.value, frameworks, str(score), p.description)
  console.print(table)
  return 0

"""
Code Generator.

Emits the final source text for a transformed component:

1.  **Serialization**: the structural tree is rendered losslessly; comment
    nodes are dropped when ``comments=False``.
2.  **Minification**: with ``minify=True``, indentation and blank lines are
    removed.
3.  **Normalization**: the target adapter applies its conventions
    (``React.FC`` annotation and ``React`` import, attribute dialect
    conversion, selector resolution).
4.  **Formatting**: with ``format`` and ``use_formatter``, the text is piped
    through the external pretty-printer; any failure keeps the unformatted
    text.

A line-level source map is built on request. It describes the text before
the formatter, so it is dropped whenever the formatter changed the output.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from motion_switcheroo.config import GenerationOptions, RuntimeConfig
from motion_switcheroo.core.component import ComponentAST
from motion_switcheroo.core.context import GenerationContext
from motion_switcheroo.core.emitter import Serializer, line_origins, minify
from motion_switcheroo.core.formatter import format_code_or_fallback
from motion_switcheroo.core.sourcemap import build_source_map
from motion_switcheroo.enums import Framework
from motion_switcheroo.errors import GenerationError
from motion_switcheroo.frameworks.base import resolve_adapter

logger = logging.getLogger(__name__)


class GeneratedCode(BaseModel):
  """
  Output of `generate`.
  """

  code: str = Field(description="The emitted source text.")
  map: Optional[str] = Field(None, description="Source Map v3 JSON, when requested and still valid.")
  imports: List[str] = Field(default_factory=list, description="Module specifiers imported by the output.")
  exports: List[str] = Field(default_factory=list, description="Labels of the component's exports.")
  framework: Framework
  typescript: bool = False


def generate(
  ast: ComponentAST,
  context: GenerationContext,
  options: Optional[GenerationOptions] = None,
  config: Optional[RuntimeConfig] = None,
) -> GeneratedCode:
  """
  Emits source text for a transformed component.

  Args:
      ast (ComponentAST): The transformed component.
      context (GenerationContext): Request state; selects the target adapter.
      options (Optional[GenerationOptions]): Emitter switches.
      config (Optional[RuntimeConfig]): Supplies the formatter command and timeout.

  Returns:
      GeneratedCode: The emitted code and module interface.

  Raises:
      GenerationError: If the tree cannot be serialized.
  """
  options = options or GenerationOptions()
  adapter = resolve_adapter(context.framework)

  try:
    pieces = Serializer(ast.arena, comments=options.comments).pieces(ast.root_id)
  except (KeyError, ValueError, IndexError, TypeError) as e:
    raise GenerationError(f"Failed to serialize component '{ast.component_name}': {e}") from e

  code = "".join(text for text, _ in pieces)
  origins = line_origins(pieces, ast.source) if options.source_map else None

  if options.minify:
    code, origins = minify(code, origins)

  normalized = adapter.normalize(code, ast, context)
  origins = realign_origins(code, normalized, origins)
  code = normalized

  if options.format and options.use_formatter:
    command = config.formatter_command if config else None
    timeout = config.formatter_timeout if config else 10.0
    formatted = format_code_or_fallback(code, adapter.formatter_parser(context.typescript), command, timeout)
    if formatted != code:
      origins = None
    code = formatted

  source_map = None
  if options.source_map and origins is not None:
    source_adapter = resolve_adapter(ast.framework)
    source_map = build_source_map(
      origins,
      source_name=f"{ast.component_name}{source_adapter.file_extension(ast.typescript)}",
      source_text=ast.source,
      file=f"{context.component_name}{adapter.file_extension(context.typescript)}",
    )
  elif options.source_map:
    logger.debug("Source map dropped: output was reformatted")

  imports = sorted({decl.source for decl in ast.imports} | context.imports)
  return GeneratedCode(
    code=code,
    map=source_map,
    imports=imports,
    exports=[e.label for e in ast.exports],
    framework=context.framework,
    typescript=context.typescript,
  )


def realign_origins(
  before: str, after: str, origins: Optional[List[Optional[int]]]
) -> Optional[List[Optional[int]]]:
  """
  Keeps line origins valid across normalization.

  Normalization rewrites lines in place or prepends whole lines, so a line
  count increase is attributed to unmapped leading lines.

  Args:
      before (str): Text the origins describe.
      after (str): Normalized text.
      origins (Optional[List[Optional[int]]]): Per-line origins of `before`.

  Returns:
      Optional[List[Optional[int]]]: Origins for `after`, or None if they
      cannot be carried over.
  """
  if origins is None or before == after:
    return origins
  added = after.count("\n") - before.count("\n")
  if added < 0:
    return None
  return [None] * added + list(origins)


def scaffold_component(
  framework: Any,
  component_name: str,
  motion_props: Optional[Dict[str, Any]] = None,
  children: Optional[str] = None,
  typescript: bool = False,
) -> str:
  """
  Builds a starter component animating a single element.

  Args:
      framework (Any): Target framework key.
      component_name (str): Component identifier.
      motion_props (Optional[Dict[str, Any]]): Animation props
          (``initial``, ``animate``, ``transition``, ...).
      children (Optional[str]): Element content.
      typescript (bool): Emit TypeScript.

  Returns:
      str: Component source, ready to feed back into the parser.

  Raises:
      UnsupportedFrameworkError: If the framework is unknown.
  """
  adapter = resolve_adapter(Framework.resolve(framework))
  return adapter.scaffold(component_name, dict(motion_props or {}), children, typescript)

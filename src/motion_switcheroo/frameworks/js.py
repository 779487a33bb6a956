"""
Vanilla JavaScript Framework Adapter.

Targets plain modules animating DOM nodes with the ``motion`` package's
``animate()`` family. There is no markup dialect to rewrite, so the adapter
contributes no rules and no layout hint.
"""

import re
from typing import Any, Dict, List, Optional

from motion_switcheroo.core.rewriter.rules import TransformationRule
from motion_switcheroo.enums import Framework
from motion_switcheroo.frameworks.base import (
  ImportTraits,
  InteractionTraits,
  LayoutHint,
  MarkupDialect,
  ParseHints,
  register_framework,
)
from motion_switcheroo.frameworks.common import js_literal

_SELECTOR_CALL_RE = re.compile(r"\banimate\(\s*(['\"`])([^'\"`]+)\1")


@register_framework("js")
class JSAdapter:
  """
  Adapter for vanilla JavaScript with motion.
  """

  key: Framework = Framework.JS
  display_name: str = "Vanilla JS (motion)"
  package: str = "motion"

  @property
  def parse_hints(self) -> ParseHints:
    return ParseHints()

  @property
  def markup_dialect(self) -> MarkupDialect:
    return MarkupDialect.JSX

  @property
  def import_traits(self) -> ImportTraits:
    return ImportTraits(
      source="motion",
      primary=[],
      companions=["animate", "spring", "timeline", "scroll", "stagger", "inView"],
    )

  @property
  def interaction(self) -> InteractionTraits:
    return InteractionTraits()

  @property
  def layout_hint(self) -> Optional[LayoutHint]:
    return None

  @property
  def cost_table(self) -> Dict[str, int]:
    return {"animate": 8000, "scroll": 4000, "stagger": 2000}

  @property
  def tracked_modules(self) -> List[str]:
    return ["motion"]

  def rules(self) -> List[TransformationRule]:
    return []

  def formatter_parser(self, typescript: bool) -> str:
    return "typescript" if typescript else "babel"

  def file_extension(self, typescript: bool) -> str:
    return ".ts" if typescript else ".js"

  def normalize(self, code: str, ast: Any, context: Any) -> str:
    """Resolves string selectors passed to ``animate`` into DOM queries."""
    return _SELECTOR_CALL_RE.sub(lambda m: f"animate(document.querySelector('{m.group(2)}')", code)

  def scaffold(
    self,
    component_name: str,
    motion_props: Dict[str, Any],
    children: Optional[str],
    typescript: bool,
  ) -> str:
    keyframes = motion_props.get("animate")
    if keyframes is None:
      keyframes = {k: v for k, v in motion_props.items() if k not in ("initial", "transition")}
    options = motion_props.get("transition")
    arguments = ", ".join(["element", js_literal(keyframes)] + ([js_literal(options)] if options is not None else []))

    lines = ["import { animate } from 'motion';", ""]
    lines.append(f"export default function {component_name}(){': void' if typescript else ''} {{")
    lines.append("  const element = document.querySelector('.motion-element');")
    for key, value in motion_props.items():
      if key not in ("animate", "transition") and "animate" in motion_props:
        lines.append(f"  // {key}: {js_literal(value)}")
    lines.append("  if (element) {")
    lines.append(f"    animate({arguments});")
    lines.append("  }")
    lines.append("}")
    return "\n".join(lines) + "\n"

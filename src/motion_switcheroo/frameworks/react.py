"""
React Framework Adapter.

Targets JSX/TSX components animated with ``framer-motion``:
1.  **Markup**: JSX dialect (``className``, ``htmlFor``, ``onClick={...}``).
2.  **Imports**: ``motion`` plus companion hooks/components from ``framer-motion``.
3.  **Hints**: ``layoutRoot`` isolates transform-heavy elements.
4.  **Normalization**: ``React.FC`` annotation and the ``React`` default import.
"""

import re
from typing import Any, Dict, List, Optional

from motion_switcheroo.core.rewriter.rules import TransformationRule, rename_attribute_rule
from motion_switcheroo.enums import Framework
from motion_switcheroo.frameworks.base import (
  ImportTraits,
  InteractionTraits,
  LayoutHint,
  MarkupDialect,
  ParseHints,
  register_framework,
)
from motion_switcheroo.frameworks.common import js_literal, template_to_jsx

_REACT_REFERENCE_RE = re.compile(r"\bReact\.")
_REACT_IMPORT_RE = re.compile(r"\bimport\s+(?:type\s+)?(?:\*\s+as\s+)?React\b")


@register_framework("react")
class ReactAdapter:
  """
  Adapter for React with framer-motion.
  """

  key: Framework = Framework.REACT
  display_name: str = "React (framer-motion)"
  package: str = "framer-motion"

  @property
  def parse_hints(self) -> ParseHints:
    return ParseHints(sfc=False, component_style=True)

  @property
  def markup_dialect(self) -> MarkupDialect:
    return MarkupDialect.JSX

  @property
  def import_traits(self) -> ImportTraits:
    return ImportTraits(
      source="framer-motion",
      primary=[],
      companions=[
        "motion",
        "AnimatePresence",
        "LayoutGroup",
        "Reorder",
        "useAnimation",
        "useSpring",
        "useTransform",
        "useMotionValue",
        "useScroll",
        "useInView",
        "animate",
      ],
    )

  @property
  def interaction(self) -> InteractionTraits:
    return InteractionTraits(
      hover=["whileHover", "onHoverStart", "onHoverEnd", "onMouseEnter"],
      tap=["whileTap", "onTap", "onTapStart"],
      focus=["whileFocus", "onFocus"],
      click=["onClick"],
    )

  @property
  def layout_hint(self) -> Optional[LayoutHint]:
    return LayoutHint(
      prop="layoutRoot",
      value="{true}",
      triggers=["animate", "initial", "exit", "whileHover", "whileTap", "layout"],
      conflicts=["layoutRoot"],
    )

  @property
  def cost_table(self) -> Dict[str, int]:
    return {"motion": 15000, "AnimatePresence": 5000, "useMotionValue": 3000}

  @property
  def tracked_modules(self) -> List[str]:
    return ["framer-motion", "motion/react", "motion"]

  def rules(self) -> List[TransformationRule]:
    return [
      rename_attribute_rule(
        "react-class-attribute",
        "Rename `class` to `className` for JSX output.",
        "class",
        "className",
        [Framework.REACT],
      ),
      rename_attribute_rule(
        "react-for-attribute",
        "Rename `for` to `htmlFor` for JSX output.",
        "for",
        "htmlFor",
        [Framework.REACT],
      ),
    ]

  def formatter_parser(self, typescript: bool) -> str:
    return "typescript" if typescript else "babel"

  def file_extension(self, typescript: bool) -> str:
    return ".tsx" if typescript else ".jsx"

  def normalize(self, code: str, ast: Any, context: Any) -> str:
    """
    Applies React output conventions.

    1. Template dialect attributes become JSX when the source was another
       framework's.
    2. With TypeScript, the component constant gets a ``React.FC``
       annotation unless it already carries one.
    3. ``import React from 'react';`` is prepended when ``React.`` is
       referenced without a binding.

    Args:
        code (str): Serialized output.
        ast (ComponentAST): The transformed component.
        context (GenerationContext): Request state.

    Returns:
        str: The normalized code.
    """
    if ast.framework != Framework.REACT:
      code = template_to_jsx(code)

    if context.typescript:
      code = annotate_component(code, context.component_name)

    if _REACT_REFERENCE_RE.search(code) and not _REACT_IMPORT_RE.search(code):
      code = "import React from 'react';\n" + code
    return code

  def scaffold(
    self,
    component_name: str,
    motion_props: Dict[str, Any],
    children: Optional[str],
    typescript: bool,
  ) -> str:
    props = "".join(_jsx_prop(k, v) for k, v in motion_props.items())
    annotation = ": React.FC" if typescript else ""
    header = "import React from 'react';\n" if typescript else ""
    return (
      f"{header}import {{ motion }} from 'framer-motion';\n"
      "\n"
      f"const {component_name}{annotation} = () => {{\n"
      "  return (\n"
      f"    <motion.div{props}>\n"
      f"      {children or 'Content goes here'}\n"
      "    </motion.div>\n"
      "  );\n"
      "};\n"
      "\n"
      f"export default {component_name};\n"
    )


def annotate_component(code: str, component_name: str) -> str:
  """
  Adds ``: React.FC`` to ``const <component_name> = (`` when unannotated.

  Args:
      code (str): Source text.
      component_name (str): The component constant to annotate.

  Returns:
      str: The annotated text (unchanged when already typed or not found).
  """
  pattern = re.compile(rf"\bconst\s+{re.escape(component_name)}(\s*:[^=]+)?\s*=\s*(?:async\s*)?\(")
  match = pattern.search(code)
  if not match or match.group(1):
    return code
  name_end = match.start() + code[match.start() :].index(component_name) + len(component_name)
  return code[:name_end] + ": React.FC" + code[name_end:]


def _jsx_prop(name: str, value: Any) -> str:
  if isinstance(value, str):
    return f' {name}="{value}"'
  if value is True:
    return f" {name}"
  return f" {name}={{{js_literal(value)}}}"

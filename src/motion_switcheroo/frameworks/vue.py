"""
Vue Framework Adapter.

Targets single-file components animated with ``@vueuse/motion``:
1.  **Markup**: template dialect (``class``, ``for``, ``@click``) and the
    ``v-motion`` directive family.
2.  **Imports**: ``MotionPlugin`` and composables from ``@vueuse/motion``,
    placed inside the ``<script>`` block.
3.  **Hints**: an inline ``will-change: transform`` style.
"""

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
from motion_switcheroo.frameworks.common import js_literal, jsx_to_template

# framer-motion style keys and their v-motion variant names.
_VARIANT_NAMES = {
  "animate": "enter",
  "exit": "leave",
  "whileHover": "hovered",
  "whileTap": "tapped",
  "whileFocus": "focused",
  "whileInView": "visibleOnce",
}


@register_framework("vue")
class VueAdapter:
  """
  Adapter for Vue with @vueuse/motion.
  """

  key: Framework = Framework.VUE
  display_name: str = "Vue (@vueuse/motion)"
  package: str = "@vueuse/motion"

  @property
  def parse_hints(self) -> ParseHints:
    return ParseHints(sfc=True, component_style=False)

  @property
  def markup_dialect(self) -> MarkupDialect:
    return MarkupDialect.TEMPLATE

  @property
  def import_traits(self) -> ImportTraits:
    return ImportTraits(
      source="@vueuse/motion",
      primary=["MotionPlugin"],
      companions=["Motion", "MotionGroup", "useMotion", "useSpring", "useMotionProperties", "useMotionVariants"],
    )

  @property
  def interaction(self) -> InteractionTraits:
    return InteractionTraits(
      hover=[":hovered", "hovered", "@mouseenter", "v-on:mouseenter"],
      tap=[":tapped", "tapped", "@mousedown"],
      focus=[":focused", "focused", "@focus"],
      click=["@click", "v-on:click"],
    )

  @property
  def layout_hint(self) -> Optional[LayoutHint]:
    return LayoutHint(
      prop="style",
      value='"will-change: transform"',
      triggers=["v-motion*", ":initial", ":enter", ":animate", ":hovered", ":tapped", "initial", "enter", "animate"],
      conflicts=[":style", "v-bind:style"],
    )

  @property
  def cost_table(self) -> Dict[str, int]:
    return {"motion": 12000, "MotionPlugin": 8000}

  @property
  def tracked_modules(self) -> List[str]:
    return ["@vueuse/motion"]

  def rules(self) -> List[TransformationRule]:
    return [
      rename_attribute_rule(
        "vue-classname-attribute",
        "Rename `className` to `class` for template output.",
        "className",
        "class",
        [Framework.VUE],
      ),
    ]

  def formatter_parser(self, typescript: bool) -> str:
    return "vue"

  def file_extension(self, typescript: bool) -> str:
    return ".vue"

  def normalize(self, code: str, ast: Any, context: Any) -> str:
    # Only foreign markup needs its attribute dialect converted.
    if ast.framework == Framework.VUE:
      return code
    return jsx_to_template(code)

  def scaffold(
    self,
    component_name: str,
    motion_props: Dict[str, Any],
    children: Optional[str],
    typescript: bool,
  ) -> str:
    """
    Builds a single-file component with a ``v-motion`` element.

    Args:
        component_name (str): Value of the ``name`` option.
        motion_props (Dict[str, Any]): Variants keyed by framer-motion or
            v-motion names (``initial``, ``animate``/``enter``, ...).
        children (Optional[str]): Element content.
        typescript (bool): Emit ``<script lang="ts">``.

    Returns:
        str: The component source.
    """
    bindings = "".join(
      f' :{_VARIANT_NAMES.get(k, k)}="{js_literal(v)}"' if not isinstance(v, str) else f' {k}="{v}"'
      for k, v in motion_props.items()
    )
    lang = ' lang="ts"' if typescript else ""
    return (
      "<template>\n"
      f"  <div v-motion{bindings}>\n"
      f"    {children or 'Content goes here'}\n"
      "  </div>\n"
      "</template>\n"
      "\n"
      f"<script{lang}>\n"
      "import { defineComponent } from 'vue';\n"
      "import { MotionPlugin } from '@vueuse/motion';\n"
      "\n"
      "export default defineComponent({\n"
      f"  name: '{component_name}',\n"
      "});\n"
      "</script>\n"
    )

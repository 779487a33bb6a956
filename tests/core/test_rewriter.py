"""
Tests for the Rewrite Engine.

Verifies:
1. Rule registry ordering, uniqueness and framework scoping.
2. Animation library import injection (insertion, merging, coalescing,
   single-file component script blocks, directives).
3. Accessibility and performance enhancement passes.
4. Transformer isolation: the input tree and the caller's context are only
   affected by a successful run.
"""

import pytest

from motion_switcheroo.config import OptimizationFlags
from motion_switcheroo.core.context import GenerationContext
from motion_switcheroo.core.emitter import serialize
from motion_switcheroo.core.nodes import StructuralNode
from motion_switcheroo.core.parser import parse_javascript, parse_react, parse_vue
from motion_switcheroo.core.rewriter import (
  RuleRegistry,
  TransformationRule,
  Transformer,
  build_rule_registry,
  rename_attribute_rule,
)
from motion_switcheroo.core.rewriter.passes import package_name
from motion_switcheroo.enums import Framework, NodeType
from motion_switcheroo.errors import TransformRuleError

NO_ENHANCEMENTS = OptimizationFlags(performance=False, accessibility=False, bundle_size=False)


def _context(framework, **flags):
  optimization = OptimizationFlags(**flags) if flags else NO_ENHANCEMENTS
  return GenerationContext(framework=framework, optimization=optimization)


def _run(ast, context, registry=None):
  result = Transformer(registry).transform(ast, context)
  return serialize(result.arena, result.root_id)


# --- Rules ---


def test_registry_rejects_duplicate_names():
  rule = rename_attribute_rule("r", "d", "class", "className", [Framework.REACT])
  registry = RuleRegistry([rule])
  with pytest.raises(ValueError, match="already registered"):
    registry.register(rule)
  assert registry.get("r") is rule
  assert registry.get("missing") is None


def test_registry_scoping():
  registry = build_rule_registry()
  assert registry.names() == ["react-class-attribute", "react-for-attribute", "vue-classname-attribute"]
  assert [r.name for r in registry.for_framework("vue")] == ["vue-classname-attribute"]
  assert registry.for_framework(Framework.JS) == []


def test_rule_scope_is_resolved():
  rule = rename_attribute_rule("r", "d", "a", "b", ["react"])
  assert rule.framework_scope == frozenset({Framework.REACT})
  assert rule.applies_to(Framework.REACT)
  assert not rule.applies_to(Framework.VUE)


def test_rename_rule_converts_template_markup_to_jsx():
  ast = parse_vue('<template>\n  <label for="x" class="a">x</label>\n</template>\n')
  out = _run(ast, _context(Framework.REACT))
  assert '<label htmlFor="x" className="a">x</label>' in out


def test_rule_can_splice_replacement_nodes():
  def transform(node, _context):
    return [
      StructuralNode(NodeType.TEXT, {"value": "<hr />", "start": None}),
      StructuralNode(NodeType.TEXT, {"value": "<hr />", "start": None}),
    ]

  rule = TransformationRule(
    name="double-rule",
    description="Replace <br> with two <hr>.",
    condition=lambda node, _c: node.type == NodeType.ELEMENT and node.attributes.get("tag") == "br",
    transform=transform,
  )
  ast = parse_react("const A = () => <p><br /></p>;\n")
  out = _run(ast, _context(Framework.REACT), RuleRegistry([rule]))
  assert out == "const A = () => <p><hr /><hr /></p>;\n"


def test_failing_rule_leaves_input_and_context_untouched():
  source = "import { motion } from 'framer-motion';\nconst A = () => <motion.div className=\"a\" />;\n"
  ast = parse_react(source)

  def explode(node, _context):
    node.attributes["tag"] = "broken"
    raise RuntimeError("boom")

  rule = TransformationRule(
    name="explode",
    description="Always fails.",
    condition=lambda node, _c: node.type == NodeType.ELEMENT,
    transform=explode,
  )
  context = _context(Framework.REACT)
  with pytest.raises(TransformRuleError) as exc:
    Transformer(RuleRegistry([rule])).transform(ast, context)

  assert exc.value.rule_name == "explode"
  assert exc.value.code == "TRANSFORM_ERROR"
  assert serialize(ast.arena, ast.root_id) == source
  assert context.imports == set()
  assert context.dependencies == set()


# --- Import injection ---


def test_import_is_inserted_at_module_top():
  ast = parse_react("const Box = () => <motion.div animate={{ x: 1 }} />;\n")
  context = _context(Framework.REACT)
  out = _run(ast, context)
  assert out == "import { motion } from 'framer-motion';\n\nconst Box = () => <motion.div animate={{ x: 1 }} />;\n"
  assert context.imports == {"framer-motion"}
  assert context.dependencies == {"framer-motion"}


def test_import_goes_after_use_client_directive():
  ast = parse_react("'use client';\nconst Box = () => <motion.div />;\n")
  out = _run(ast, _context(Framework.REACT))
  assert out == "'use client';\nimport { motion } from 'framer-motion';\n\nconst Box = () => <motion.div />;\n"


def test_missing_binding_is_merged_into_existing_import():
  source = (
    "import { AnimatePresence } from 'framer-motion'\n"
    "const A = () => <AnimatePresence><motion.div /></AnimatePresence>;\n"
  )
  out = _run(parse_react(source), _context(Framework.REACT))
  assert out.startswith("import { AnimatePresence, motion } from 'framer-motion'\n")
  assert out.count("from 'framer-motion'") == 1


def test_duplicate_imports_are_coalesced():
  source = (
    "import { motion } from 'framer-motion';\n"
    "import { AnimatePresence } from 'framer-motion';\n"
    "const A = () => <AnimatePresence><motion.div /></AnimatePresence>;\n"
  )
  out = _run(parse_react(source), _context(Framework.REACT))
  assert out == (
    "import { motion, AnimatePresence } from 'framer-motion';\n"
    "const A = () => <AnimatePresence><motion.div /></AnimatePresence>;\n"
  )


def test_namespace_import_satisfies_injection():
  source = "import * as FM from 'framer-motion';\nconst A = () => <motion.div />;\n"
  context = _context(Framework.REACT)
  assert _run(parse_react(source), context) == source
  assert "framer-motion" in context.imports


def test_name_bound_by_another_module_is_not_reimported():
  source = "import { motion } from 'motion/react';\nconst A = () => <motion.div />;\n"
  context = _context(Framework.REACT)
  assert _run(parse_react(source), context) == source
  assert context.imports == {"framer-motion", "motion/react"}
  assert context.dependencies == {"framer-motion", "motion"}


def test_type_only_import_becomes_value_import():
  source = "import type { Variants } from 'framer-motion';\nconst A = () => <motion.div />;\n"
  out = _run(parse_react(source, typescript=True), _context(Framework.REACT))
  assert out.startswith("import { type Variants, motion } from 'framer-motion';\n")


def test_unanimated_component_gets_no_import():
  source = "const A = () => <div />;\n"
  context = _context(Framework.REACT)
  assert _run(parse_react(source), context) == source
  assert context.imports == set()


def test_vue_import_goes_into_existing_script():
  source = (
    "<template>\n"
    '  <div v-motion :initial="{ opacity: 0 }">Hi</div>\n'
    "</template>\n"
    "\n"
    "<script>\n"
    "export default { name: 'Box' }\n"
    "</script>\n"
  )
  out = _run(parse_vue(source), _context(Framework.VUE))
  assert out.endswith(
    "<script>\nimport { MotionPlugin } from '@vueuse/motion';\nexport default { name: 'Box' }\n</script>\n"
  )


def test_vue_script_block_is_created():
  source = "<template>\n  <div v-motion>Hi</div>\n</template>\n"
  context = _context(Framework.VUE)
  out = _run(parse_vue(source), context)
  assert out.startswith(source)
  assert out.endswith("<script setup>\nimport { MotionPlugin } from '@vueuse/motion';\n</script>\n")
  assert context.dependencies == {"@vueuse/motion"}


def test_js_animate_call_imports_motion():
  ast = parse_javascript("animate('.box', { x: 100 });\n")
  context = _context(Framework.JS)
  out = _run(ast, context)
  assert out == "import { animate } from 'motion';\n\nanimate('.box', { x: 100 });\n"
  assert context.imports == {"motion"}


# --- Enhancements ---


def test_accessibility_pass_labels_interactive_elements():
  source = "const A = () => <motion.button whileHover={{ scale: 1.1 }}>Go</motion.button>;\n"
  out = _run(parse_react(source), _context(Framework.REACT, accessibility=True, performance=False))
  assert '<motion.button whileHover={{ scale: 1.1 }} aria-label="Interactive element">Go</motion.button>' in out


def test_accessibility_pass_keeps_existing_label():
  source = 'const A = () => <motion.a aria-label="Home">Go</motion.a>;\n'
  out = _run(parse_react(source), _context(Framework.REACT, accessibility=True, performance=False))
  assert out.count("aria-label") == 1


def test_accessibility_pass_ignores_static_elements():
  source = "const A = () => <motion.div animate={{ x: 1 }} />;\n"
  out = _run(parse_react(source), _context(Framework.REACT, accessibility=True, performance=False))
  assert "aria-label" not in out


def test_performance_pass_adds_layout_root():
  source = "const A = () => <motion.div animate={{ x: 1 }} />;\n"
  out = _run(parse_react(source), _context(Framework.REACT, accessibility=False, performance=True))
  assert "<motion.div animate={{ x: 1 }} layoutRoot={true} />" in out


def test_performance_pass_adds_vue_style_hint():
  source = "<template>\n  <div v-motion>Hi</div>\n</template>\n"
  out = _run(parse_vue(source), _context(Framework.VUE, accessibility=False, performance=True))
  assert '<div v-motion style="will-change: transform">Hi</div>' in out


def test_performance_pass_respects_bound_style():
  source = '<template>\n  <div v-motion :style="s">Hi</div>\n</template>\n'
  out = _run(parse_vue(source), _context(Framework.VUE, accessibility=False, performance=True))
  assert "will-change" not in out


def test_enhancements_are_idempotent():
  source = "const A = () => <motion.button whileTap={{ scale: 0.9 }} animate={{ x: 1 }} />;\n"
  context = _context(Framework.REACT, accessibility=True, performance=True)
  transformer = Transformer()
  once = transformer.transform(parse_react(source), context)
  twice = transformer.transform(once, context)
  assert serialize(twice.arena, twice.root_id) == serialize(once.arena, once.root_id)


def test_transform_does_not_mutate_input():
  source = "const A = () => <motion.button whileHover={{ scale: 1.1 }} />;\n"
  ast = parse_react(source)
  result = Transformer().transform(ast, _context(Framework.REACT, accessibility=True, performance=True))
  assert serialize(ast.arena, ast.root_id) == source
  assert ast.imports == []
  assert [d.source for d in result.imports] == ["framer-motion"]


@pytest.mark.parametrize(
  "source, expected",
  [
    ("framer-motion", "framer-motion"),
    ("motion/react", "motion"),
    ("@vueuse/motion", "@vueuse/motion"),
    ("@scope/pkg/sub", "@scope/pkg"),
    ("./local", None),
    ("/abs/path", None),
    ("", None),
  ],
)
def test_package_name(source, expected):
  assert package_name(source) == expected

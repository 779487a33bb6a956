"""
Tests for the Structural Parser.

Verifies:
1. Lossless round-trip for React, Vue SFC and vanilla JS sources.
2. Import declaration parsing (default, named, aliased, namespace, type-only).
3. Component name resolution order.
4. Single-file component block handling.
5. ParseError reporting for malformed input.
"""

import logging

import pytest

from motion_switcheroo.core.component import ParseOptions
from motion_switcheroo.core.emitter import serialize
from motion_switcheroo.core.parser import parse, parse_javascript, parse_react, parse_vue
from motion_switcheroo.enums import ExportKind, Framework, NodeType, SpecifierKind
from motion_switcheroo.errors import ParseError, UnsupportedFrameworkError

REACT_SOURCE = """'use client';
import React from 'react';
import { motion } from "framer-motion"

// Card
export default function FadeCard({ title }) {
  const re = /a<b/g;
  return (
    <motion.div className="card" initial={{ opacity: 0 }} animate={{ opacity: 1 }} {...rest}>
      <h2>{title}</h2>
      <br />
      {items.map(i => <span key={i}>{i}</span>)}
    </motion.div>
  );
}
"""

VUE_SOURCE = """<template>
  <!-- hero -->
  <div v-motion :initial="{ opacity: 0 }" :enter="{ opacity: 1, transition: { duration: 0.5 } }" class="box">
    {{ title }}
    <img src="a.png">
  </div>
</template>

<script setup>
import { ref } from 'vue'
const title = ref('Hi')
</script>

<style scoped>
.box { color: red; }
</style>
"""

JS_SOURCE = """import { animate, stagger } from 'motion';

const items = document.querySelectorAll('.item');
animate(items, { opacity: [0, 1], y: [20, 0] }, { delay: stagger(0.1), duration: 0.5 });
"""


@pytest.mark.parametrize(
  "source, parser",
  [
    (REACT_SOURCE, parse_react),
    (VUE_SOURCE, parse_vue),
    (JS_SOURCE, parse_javascript),
  ],
)
def test_round_trip_is_lossless(source, parser):
  ast = parser(source)
  assert serialize(ast.arena, ast.root_id) == source


def test_react_structure():
  ast = parse_react(REACT_SOURCE)
  assert ast.framework == Framework.REACT
  assert ast.component_name == "FadeCard"
  assert ast.root.attributes["mode"] == "script"

  tags = [n.attributes["tag"] for n in ast.arena.find(ast.root_id, NodeType.ELEMENT)]
  assert tags == ["motion.div", "h2", "br", "span"]

  motion_div = ast.arena.find(ast.root_id, NodeType.ELEMENT)[0]
  assert [p.name for p in motion_div.props] == ["className", "initial", "animate", "..."]
  assert motion_div.attributes["line"] == 9

  comments = ast.arena.find(ast.root_id, NodeType.COMMENT)
  assert comments[0].attributes["value"] == "// Card"


def test_react_imports():
  ast = parse_react(REACT_SOURCE)
  sources = [d.source for d in ast.imports]
  assert sources == ["react", "framer-motion"]

  react_import, motion_import = ast.imports
  assert react_import.default.local == "React"
  assert motion_import.quote == '"'
  assert motion_import.semicolon is False
  assert motion_import.has_named("motion")


def test_regex_containing_angle_bracket_is_not_markup():
  ast = parse_react("const re = /a<b/g;\n")
  assert ast.arena.find(ast.root_id, NodeType.ELEMENT) == []


def test_vue_sfc_structure():
  ast = parse_vue(VUE_SOURCE)
  assert ast.root.attributes["mode"] == "sfc"
  assert ast.component_name == "UnnamedComponent"
  assert [d.source for d in ast.imports] == ["vue"]
  assert "title" in ast.declarations

  blocks = [c.attributes["tag"] for c in ast.arena.children(ast.root_id) if c.type == NodeType.ELEMENT]
  assert blocks == ["template", "script", "style"]

  img = next(n for n in ast.arena.find(ast.root_id, NodeType.ELEMENT) if n.attributes["tag"] == "img")
  assert img.attributes["void"] is True

  div = next(n for n in ast.arena.find(ast.root_id, NodeType.ELEMENT) if n.attributes["tag"] == "div")
  assert div.has_prop("v-motion")
  assert div.get_prop("v-motion").value is None
  assert div.get_prop(":initial").string_value == "{ opacity: 0 }"


def test_vue_options_name():
  source = "<template><div /></template>\n<script>\nexport default { name: 'FadeCard', props: { a: { name: 'x' } } };\n</script>\n"
  ast = parse_vue(source)
  assert ast.component_name == "FadeCard"


def test_vue_define_component_name():
  source = "<script>\nimport { defineComponent } from 'vue';\nexport default defineComponent({ name: 'Hero' });\n</script>\n"
  assert parse_vue(source).component_name == "Hero"


def test_vue_plain_script_source_is_not_sfc():
  ast = parse_vue("import { MotionPlugin } from '@vueuse/motion';\n")
  assert ast.root.attributes["mode"] == "script"


def test_vue_template_plugin_enables_sfc():
  options = ParseOptions(framework="react", plugins=["vue-template"])
  ast = parse("<template><div v-motion /></template>\n", options)
  assert ast.root.attributes["mode"] == "sfc"


def test_js_calls():
  ast = parse_javascript(JS_SOURCE)
  calls = ast.arena.find(ast.root_id, NodeType.CALL)
  callees = [c.attributes["callee"] for c in calls]
  assert callees == ["animate", "stagger"]
  assert calls[0].attributes["line"] == 4
  assert calls[0].attributes["definition"] is False


def test_function_declaration_is_not_a_call():
  ast = parse_javascript("function animate() {}\nclass A { animate() { return 1; } }\n")
  calls = ast.arena.find(ast.root_id, NodeType.CALL)
  assert all(c.attributes["definition"] for c in calls)


def test_import_forms():
  source = (
    "import motion, { AnimatePresence as AP } from 'framer-motion';\n"
    "import * as M from 'motion';\n"
    "import type { Variants } from 'framer-motion';\n"
    "import './styles.css';\n"
    "const lazy = import('./x');\n"
  )
  ast = parse_react(source)
  decls = ast.imports
  assert len(decls) == 4

  first = decls[0]
  assert first.default.local == "motion"
  assert first.named[0].imported == "AnimatePresence"
  assert first.named[0].local == "AP"

  assert decls[1].namespace.local == "M"
  assert decls[1].namespace.kind == SpecifierKind.NAMESPACE
  assert decls[2].type_only is True
  assert decls[3].specifiers == []
  assert decls[3].source == "./styles.css"


@pytest.mark.parametrize(
  "source, expected",
  [
    ("const Button = () => <motion.button />;\nexport default Button;\n", "Button"),
    ("function Card() { return <motion.div />; }\n", "Card"),
    ("const Card = () => null;\nexport default React.memo(Card);\n", "Card"),
    ("const Card = () => null;\nexport default memo(Card);\n", "Card"),
    ("const helper = 1;\nconst Panel = function () { return null; };\n", "Panel"),
    ("const x = 1;\n", "UnnamedComponent"),
  ],
)
def test_react_component_name(source, expected):
  assert parse_react(source).component_name == expected


def test_js_component_name_from_default_function():
  assert parse_javascript("export default function fadeIn() {}\n").component_name == "fadeIn"


def test_js_uppercase_function_is_not_component():
  assert parse_javascript("function Setup() {}\n").component_name == "UnnamedComponent"


def test_export_list():
  ast = parse_react("const A = 1, C = 2;\nexport { A as B, C };\nexport { Card as default };\n")
  named = [e for e in ast.exports if e.kind == ExportKind.NAMED]
  assert named[0].label == "B, C"
  assert ast.component_name == "Card"


def test_typescript_assertion_is_not_markup():
  source = "const x = <number>y;\nconst f = <T,>(v: T) => v;\n"
  ast = parse_react(source, typescript=True)
  assert ast.arena.find(ast.root_id, NodeType.ELEMENT) == []
  assert serialize(ast.arena, ast.root_id) == source


def test_deeply_nested_markup():
  depth = 150
  source = "const x = " + "<div>" * depth + "</div>" * depth + ";\n"
  ast = parse_react(source)
  assert len(ast.arena.find(ast.root_id, NodeType.ELEMENT)) == depth
  assert serialize(ast.arena, ast.root_id) == source


@pytest.mark.parametrize(
  "source, parser, message",
  [
    ("const x = <div>hello;", parse_react, "Unclosed element <div>"),
    ("const x = <div></span>;", parse_react, "Mismatched closing tag </span> for <div>"),
    ("foo);", parse_javascript, "Unbalanced ')'"),
    ("const x = <div>{a", parse_react, "Unexpected end of input, expected '}'"),
    ("const a = (1 + 2;", parse_javascript, "Unclosed '('"),
    ("import { from 'x';", parse_javascript, "Malformed import declaration"),
    ("<template></template>\n</div>", parse_vue, "Unexpected closing tag"),
  ],
)
def test_parse_errors(source, parser, message):
  with pytest.raises(ParseError) as exc:
    parser(source)
  assert exc.value.cause == message
  assert exc.value.line >= 1
  assert exc.value.snippet


def test_unknown_plugin_warns(caplog):
  with caplog.at_level(logging.WARNING):
    parse("const x = 1;", ParseOptions(framework="js", plugins=["bogus"]))
  assert "Ignoring unknown parser plugin 'bogus'" in caplog.text


def test_unknown_framework_rejected():
  with pytest.raises(UnsupportedFrameworkError):
    ParseOptions(framework="svelte")


def test_excessive_nesting_is_a_parse_error():
  markup = "<div>" * 200 + "</div>" * 200
  with pytest.raises(ParseError, match="Nesting deeper than"):
    parse_react(f"const Deep = () => {markup};\n")

  calls = "f(" * 200 + ")" * 200
  with pytest.raises(ParseError):
    parse_javascript(f"{calls};\n")


def test_moderate_nesting_round_trips():
  source = "const Deep = () => " + "<div>" * 60 + "x" + "</div>" * 60 + ";\n"
  ast = parse_react(source)
  assert serialize(ast.arena, ast.root_id) == source

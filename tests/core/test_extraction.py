"""
Tests for Animated Element Extraction.

Verifies:
1. Recognition of motion namespace elements, the Motion component,
   v-motion directives and animate() calls.
2. Static literal resolution with opaque fallback per member.
3. Argument splitting on top-level commas.
"""

import pytest

from motion_switcheroo.core.component import OpaqueValue, is_opaque
from motion_switcheroo.core.extraction import evaluate_literal, extract_animated_elements, split_arguments
from motion_switcheroo.core.parser import parse_javascript, parse_react, parse_vue


def test_react_motion_elements():
  source = (
    "const A = () => (\n"
    '  <motion.div className="card" initial={{ opacity: 0 }} animate={{ opacity: 1, x: -20 }} layout {...rest}>\n'
    "    <span>plain</span>\n"
    "    <Motion animate={controls} />\n"
    "  </motion.div>\n"
    ");\n"
  )
  elements = extract_animated_elements(parse_react(source))
  assert [e.tag for e in elements] == ["motion.div", "Motion"]

  first = elements[0]
  assert first.line == 2
  assert first.props["className"] == "card"
  assert first.props["initial"] == {"opacity": 0}
  assert first.props["animate"] == {"opacity": 1, "x": -20}
  assert first.props["layout"] is True
  assert "..." not in first.props
  assert not first.has_opaque_values

  second = elements[1]
  assert second.props["animate"] == OpaqueValue("controls")
  assert second.has_opaque_values


def test_vue_directive_elements():
  source = (
    "<template>\n"
    '  <div v-motion :initial="{ opacity: 0 }" v-bind:enter="{ opacity: 1 }" class="box">Hi</div>\n'
    '  <p v-motion-fade>Fade</p>\n'
    "</template>\n"
  )
  elements = extract_animated_elements(parse_vue(source))
  assert [e.tag for e in elements] == ["div", "p"]
  assert elements[0].props == {
    "v-motion": True,
    "initial": {"opacity": 0},
    "enter": {"opacity": 1},
    "class": "box",
  }
  assert elements[1].props == {"v-motion-fade": True}


def test_animate_call_arguments():
  source = "animate(items, { opacity: [0, 1] }, { delay: stagger(0.1), duration: 0.5 });\n"
  (element,) = extract_animated_elements(parse_javascript(source))
  assert element.tag == "animate"
  args = element.props["arguments"]
  assert args[0] == OpaqueValue("items")
  assert args[1] == {"opacity": [0, 1]}
  assert args[2]["delay"] == OpaqueValue("stagger(0.1)")
  assert args[2]["duration"] == 0.5


def test_animate_definition_is_ignored():
  source = "class Anim { animate() { return 1; } }\n"
  assert extract_animated_elements(parse_javascript(source)) == []


@pytest.mark.parametrize(
  "text, expected",
  [
    ("'fade'", "fade"),
    ('"a\\nb"', "a\nb"),
    ("`plain`", "plain"),
    ("42", 42),
    ("-1.5", -1.5),
    ("0x10", 16),
    ("true", True),
    ("false", False),
    ("null", None),
    ("undefined", None),
    ("[1, 'two', [3]]", [1, "two", [3]]),
    ("{ 'data-x': 1, y: { z: false } }", {"data-x": 1, "y": {"z": False}}),
    ("{ a: 1, }", {"a": 1}),
    ("{}", {}),
  ],
)
def test_evaluate_literal(text, expected):
  assert evaluate_literal(text) == expected


def test_evaluate_literal_opaque_members():
  value = evaluate_literal("{ x: width * 2, ease, y: 3 }")
  assert value["x"] == OpaqueValue("width * 2")
  assert value["ease"] == OpaqueValue("ease")
  assert value["y"] == 3


@pytest.mark.parametrize("text", ["width * 2", "`a ${b}`", "fn()", "", "{ a: 1"])
def test_evaluate_literal_opaque(text):
  assert is_opaque(evaluate_literal(text))


def test_opaque_value_renders_placeholder():
  assert str(OpaqueValue("x + 1")) == "[Complex Expression]"


def test_split_arguments():
  assert split_arguments("a, { b: 1, c: [2, 3] }, fn(d, e)") == ["a", "{ b: 1, c: [2, 3] }", "fn(d, e)"]
  assert split_arguments("  ") == []
  assert split_arguments("'a,b', c") == ["'a,b'", "c"]

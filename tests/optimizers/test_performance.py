"""
Tests for the Performance Analyzer.
"""

from motion_switcheroo.enums import Severity, SuggestionKind
from motion_switcheroo.optimizers import PerformanceAnalyzer


def test_layout_properties_are_flagged():
  code = "const A = () => (\n  <motion.div animate={{ width: '100px' }} />\n);\n"
  (suggestion,) = PerformanceAnalyzer().analyze(code, "react")
  assert suggestion.kind == SuggestionKind.PERFORMANCE
  assert suggestion.severity == Severity.HIGH
  assert suggestion.line == 2
  assert "layout thrashing" in suggestion.message


def test_numeric_layout_values_are_not_flagged():
  assert PerformanceAnalyzer().analyze("<motion.div animate={{ width: 100 }} />", "react") == []


def test_transform_without_hint():
  analyzer = PerformanceAnalyzer()
  (suggestion,) = analyzer.analyze("<motion.div style={{ transform: 'scale(2)' }} />", "react")
  assert suggestion.severity == Severity.MEDIUM
  assert "will-change" in suggestion.message

  hinted = "<motion.div layoutRoot style={{ transform: 'scale(2)' }} />"
  assert analyzer.analyze(hinted, "react") == []


def test_too_many_animations():
  code = "\n".join("<motion.div animate={{ x: 1 }} />" for _ in range(6))
  messages = [s.message for s in PerformanceAnalyzer().analyze(code, "react")]
  assert messages == ["Too many simultaneous animations may impact performance"]


def test_style_blocks_are_ignored():
  code = "<template>\n  <div v-motion />\n</template>\n<style>\n.a { width: '1px'; transform: none }\n</style>\n"
  assert PerformanceAnalyzer().analyze(code, "vue") == []


def test_rewrite_replaces_layout_animation():
  code = "<motion.div animate={{ width: '100px', height: \"50%\" }} />"
  assert PerformanceAnalyzer().optimize(code, "react") == "<motion.div animate={{ scaleX: 1, scaleY: 1 }} />"


def test_rewrite_adds_hint_once():
  code = "<motion.div style={{ transform: 'scale(2)' }} />"
  out = PerformanceAnalyzer().optimize(code, "react")
  assert out == "<motion.div style={{ willChange: \"transform\", transform: 'scale(2)' }} />"
  assert PerformanceAnalyzer().optimize(out, "react") == out


def test_rewrite_clamps_long_durations():
  code = "transition={{ duration: 2.5 }} other={{ duration: 0.3 }}"
  assert PerformanceAnalyzer().optimize(code, "react") == "transition={{ duration: 1 }} other={{ duration: 0.3 }}"


def test_rewrite_leaves_style_blocks():
  code = "<div v-motion></div>\n<style>\n.a { width: '1px' }\n</style>\n"
  assert PerformanceAnalyzer().optimize(code, "vue") == code


def test_key_guard_avoids_partial_names():
  code = "{ maxWidth: '10px', 'min-width': '1px' }"
  assert PerformanceAnalyzer().optimize(code, "react") == code

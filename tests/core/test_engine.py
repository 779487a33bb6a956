"""
Tests for the Orchestration Engine.

Verifies:
1. A successful run returns code, interface and analysis.
2. Pipeline failures become a failed result with a stable error code.
3. Cross-framework conversion and output optimization.
"""

from unittest.mock import patch

from motion_switcheroo.config import OptimizationFlags
from motion_switcheroo.core.engine import MotionEngine, generate_component
from motion_switcheroo.core.parser import parse_react
from motion_switcheroo.enums import Framework, SuggestionKind

REACT_SOURCE = (
  "const FadeCard = () => (\n"
  "  <motion.div initial={{ opacity: 0 }} animate={{ opacity: 1 }}>\n"
  "    Hello\n"
  "  </motion.div>\n"
  ");\n"
  "\n"
  "export default FadeCard;\n"
)


def test_successful_run(make_config):
  engine = MotionEngine(make_config(framework="react"))
  result = engine.run(REACT_SOURCE)

  assert result.success
  assert result.error is None
  assert result.component_name == "FadeCard"
  assert result.framework == Framework.REACT
  assert result.code.startswith("import { motion } from 'framer-motion';\n\n")
  assert "layoutRoot={true}" in result.code
  assert result.imports == ["framer-motion"]
  assert result.exports == ["FadeCard"]
  assert result.dependencies == ["framer-motion"]
  assert result.cost is not None
  assert result.cost.breakdown == {"motion": 15000}
  kinds = {s.kind for s in result.suggestions}
  assert SuggestionKind.ACCESSIBILITY in kinds


def test_component_name_override(make_config):
  result = MotionEngine(make_config()).run(REACT_SOURCE, component_name="Renamed")
  assert result.component_name == "Renamed"


def test_parse_failure_is_reported(make_config):
  result = MotionEngine(make_config()).run("const A = () => <div>;\n")
  assert not result.success
  assert result.error_type == "PARSE_ERROR"
  assert result.code == ""
  assert result.framework == Framework.REACT


def test_vue_to_react_conversion(make_config):
  source = '<template>\n  <div v-motion class="box" @click="go">Hi</div>\n</template>\n'
  config = make_config(framework="vue", target="react", optimization=OptimizationFlags(performance=False))
  result = MotionEngine(config).run(source)
  assert result.success
  assert result.framework == Framework.REACT
  assert 'className="box"' in result.code
  assert 'onClick="go"' in result.code


def test_disabled_bundle_analysis_has_no_cost(make_config):
  config = make_config(optimization=OptimizationFlags(bundle_size=False))
  result = MotionEngine(config).run(REACT_SOURCE)
  assert result.cost is None
  assert all(s.kind != SuggestionKind.BUNDLE_SIZE for s in result.suggestions)


def test_optimize_output_rewrites_code(make_config):
  config = make_config(optimize_output=True, optimization=OptimizationFlags(performance=False, bundle_size=False))
  result = MotionEngine(config).run(REACT_SOURCE)
  assert "prefersReducedMotion" in result.code
  assert "initial={prefersReducedMotion ? false : { opacity: 0 }}" in result.code


def test_formatter_runs_when_enabled(make_config):
  config = make_config(generation={"use_formatter": True})
  with patch("motion_switcheroo.core.generator.format_code_or_fallback", side_effect=lambda code, *a: code) as fmt:
    MotionEngine(config).run(REACT_SOURCE)
  assert fmt.call_args[0][1] == "babel"
  assert fmt.call_args[0][2] == ["prettier"]


def test_generate_component_helper(make_config):
  result = generate_component("animate('.box', { x: 100 });\n", make_config(framework="js"))
  assert result.success
  assert result.code.startswith("import { animate } from 'motion';")
  assert "document.querySelector('.box')" in result.code


def test_react_to_vue_keeps_source_library_import(make_config):
  source = "import { motion } from 'framer-motion';\n\n" + REACT_SOURCE
  config = make_config(framework="react", target="vue", optimization=OptimizationFlags(performance=False))
  result = MotionEngine(config).run(source)

  assert result.success
  assert result.framework == Framework.VUE
  # The markup stays JSX, so `motion.div` still needs its binding.
  assert "import { motion } from 'framer-motion';" in result.code
  assert "<motion.div" in result.code
  assert "framer-motion" in result.dependencies
  assert parse_react(result.code).component_name == "FadeCard"

"""
Tests for the Optimizer Suite.

Verifies flag selection, analyzer ordering and that optimizing is idempotent
for arbitrary combinations of animation snippets.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from motion_switcheroo.config import OptimizationFlags
from motion_switcheroo.enums import SuggestionKind
from motion_switcheroo.errors import UnsupportedFrameworkError
from motion_switcheroo.optimizers import (
  AccessibilityAnalyzer,
  BundleAnalyzer,
  OptimizerSuite,
  PerformanceAnalyzer,
)

SNIPPETS = [
  "import { motion } from 'framer-motion';",
  "import { AnimatePresence, useSpring } from 'framer-motion';",
  "import motion from 'framer-motion';",
  "import { MotionPlugin, useMotion } from '@vueuse/motion';",
  "import { animate, stagger } from 'motion';",
  "<motion.div animate={{ width: '100px' }} />",
  "<motion.button whileHover={{ scale: 1.1 }}>Go</motion.button>",
  "<motion.div initial={{ opacity: 0 }} transition={{ duration: 3 }} />",
  "<div style={{ transform: 'scale(2)' }} />",
  "<AnimatePresence>{open ? <motion.p>Hi</motion.p> : null}</AnimatePresence>",
  '<div v-motion :initial="{ y: 10 }" :hovered="{ scale: 1.2 }">x</div>',
  "animate(el, { x: 1 }, { duration: 2 });",
  "<style>.a { width: '1px'; transition: none }</style>",
  "const value = useSpring(0);",
]


def test_flags_select_analyzers():
  suite = OptimizerSuite(OptimizationFlags(performance=False))
  assert [type(a) for a in suite.analyzers] == [AccessibilityAnalyzer, BundleAnalyzer]
  assert [type(a) for a in OptimizerSuite().analyzers] == [PerformanceAnalyzer, AccessibilityAnalyzer, BundleAnalyzer]
  assert OptimizerSuite(OptimizationFlags.from_focus(["bundle-size"])).analyzers[0].kind == SuggestionKind.BUNDLE_SIZE


def test_suggestions_follow_analyzer_order():
  code = "import motion from 'framer-motion';\n<motion.div animate={{ height: '10px' }} />\n"
  kinds = [s.kind for s in OptimizerSuite().analyze(code, "react")]
  assert kinds == [SuggestionKind.PERFORMANCE, SuggestionKind.ACCESSIBILITY, SuggestionKind.BUNDLE_SIZE]


def test_unknown_framework_is_rejected():
  with pytest.raises(UnsupportedFrameworkError):
    OptimizerSuite().analyze("", "svelte")
  with pytest.raises(UnsupportedFrameworkError):
    OptimizerSuite().optimize("", "svelte")


def test_no_match_returns_input():
  code = "const a = 1;\n"
  assert OptimizerSuite().optimize(code, "react") == code


@settings(max_examples=60, deadline=None)
@given(
  parts=st.lists(st.sampled_from(SNIPPETS), min_size=1, max_size=6),
  framework=st.sampled_from(["react", "vue", "js"]),
)
def test_optimize_is_idempotent(parts, framework):
  suite = OptimizerSuite()
  once = suite.optimize("\n".join(parts) + "\n", framework)
  assert suite.optimize(once, framework) == once

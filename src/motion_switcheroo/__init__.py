"""
motion-switcheroo Package.

Parses animation components written for one framework (React with
framer-motion, Vue with @vueuse/motion, or vanilla JS with motion), rewrites
them for a target framework and emits formatted, optimized source.

Usage
-----

Simple String Generation
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import motion_switcheroo as ms
    code = "<motion.div animate={{ opacity: 1 }} />"
    print(ms.generate(code, framework="react", use_formatter=False))

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from motion_switcheroo import MotionEngine, RuntimeConfig

    config = RuntimeConfig(framework="react", target="vue", optimize_output=True)
    res = MotionEngine(config=config).run(source)

    if res.success:
        print(res.code)
    else:
        print(f"{res.error_type}: {res.error}")
"""

from typing import Optional

from motion_switcheroo.config import GenerationOptions, OptimizationFlags, RuntimeConfig
from motion_switcheroo.core.engine import GenerationResult, MotionEngine
from motion_switcheroo.errors import GenerationError

__version__ = "0.1.0"


def generate(
  code: str,
  framework: str = "react",
  target: Optional[str] = None,
  typescript: bool = False,
  optimize: bool = False,
  use_formatter: bool = True,
) -> str:
  """
  Generates a component from source text.

  This is a high-level convenience wrapper around `MotionEngine`. For file
  processing, use `motion_switcheroo.cli` or `MotionEngine` directly.

  Args:
      code (str): The component source.
      framework (str): Source framework key ("react", "vue", "js").
      target (Optional[str]): Target framework key; defaults to `framework`.
      typescript (bool): Source and output use TypeScript.
      optimize (bool): Rewrite the output with the optimizer suite.
      use_formatter (bool): Pipe the output through the external pretty-printer.

  Returns:
      str: The generated source code.

  Raises:
      GenerationError: If the pipeline fails.
  """
  config = RuntimeConfig(
    framework=framework,
    target=target,
    typescript=typescript,
    optimize_output=optimize,
    generation=GenerationOptions(use_formatter=use_formatter),
  )
  result = MotionEngine(config=config).run(code)
  if not result.success:
    raise GenerationError(
      f"Generation failed: {result.error}",
      {"error_type": result.error_type},
    )
  return result.code


__all__ = [
  "GenerationOptions",
  "GenerationResult",
  "MotionEngine",
  "OptimizationFlags",
  "RuntimeConfig",
  "generate",
  "__version__",
]

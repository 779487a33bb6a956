"""
Main Entry Point for the motion-switcheroo CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `motion_switcheroo.cli.handlers`.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from motion_switcheroo import __version__
from motion_switcheroo.cli import handlers
from motion_switcheroo.config import parse_cli_key_values
from motion_switcheroo.enums import Complexity, PatternCategory, TemplateCategory
from motion_switcheroo.utils.console import console

FOCUS_AREAS = ["performance", "accessibility", "bundle-size"]


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="motion-switcheroo: Cross-framework animation component generator")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: GENERATE ---
  cmd_gen = subparsers.add_parser("generate", help="Generate a component for a target framework")
  cmd_gen.add_argument("path", type=Path, nargs="?", default=None, help="Input component file")
  cmd_gen.add_argument("--template", default=None, help="Use a packaged template as input instead of a file")
  cmd_gen.add_argument("--pattern", nargs="+", default=None, metavar="ID", help="Render animation pattern(s) as input")
  cmd_gen.add_argument("--framework", default=None, help="Source framework (default: from toml)")
  cmd_gen.add_argument("--target", default=None, help="Target framework (default: the source framework)")
  cmd_gen.add_argument("--ts", action="store_true", default=None, help="Source and output use TypeScript")
  cmd_gen.add_argument("--name", default=None, help="Override the component name")
  cmd_gen.add_argument("--optimize", action="store_true", help="Rewrite the output with the optimizers")
  cmd_gen.add_argument("--focus", nargs="+", choices=FOCUS_AREAS, default=None, help="Optimization areas")
  cmd_gen.add_argument("--out", type=Path, help="Output file (default: stdout)")
  cmd_gen.add_argument(
    "--config",
    nargs="*",
    help="Emitter options in key=value format (e.g. use_formatter=false source_map=true)",
  )

  # --- Command: ANALYZE ---
  cmd_an = subparsers.add_parser("analyze", help="Report optimization suggestions for generated code")
  cmd_an.add_argument("path", type=Path, help="Generated code file")
  cmd_an.add_argument("--framework", default="react", help="Framework the code targets (default: react)")
  cmd_an.add_argument("--focus", nargs="+", choices=FOCUS_AREAS, default=None, help="Analyzers to run")
  cmd_an.add_argument("--json", action="store_true", help="Print JSON instead of a table")

  # --- Command: OPTIMIZE ---
  cmd_opt = subparsers.add_parser("optimize", help="Rewrite generated code with the optimizers")
  cmd_opt.add_argument("path", type=Path, help="Generated code file")
  cmd_opt.add_argument("--framework", default="react", help="Framework the code targets (default: react)")
  cmd_opt.add_argument("--focus", nargs="+", choices=FOCUS_AREAS, default=None, help="Optimizers to apply")
  cmd_opt.add_argument("--out", type=Path, help="Output file (default: stdout)")

  # --- Command: TEMPLATES ---
  cmd_tpl = subparsers.add_parser("templates", help="List starter templates")
  cmd_tpl.add_argument("--framework", default=None, help="Only templates for this framework")
  cmd_tpl.add_argument("--category", choices=[c.value for c in TemplateCategory], default=None)
  cmd_tpl.add_argument("--complexity", choices=[c.value for c in Complexity], default=None)
  cmd_tpl.add_argument("--show", default=None, metavar="ID", help="Print the code of one template")

  # --- Command: PATTERNS ---
  cmd_pat = subparsers.add_parser("patterns", help="List animation patterns")
  cmd_pat.add_argument("--framework", default=None, help="Only patterns supporting this framework")
  cmd_pat.add_argument("--category", choices=[c.value for c in PatternCategory], default=None)
  cmd_pat.add_argument("--complexity", choices=[c.value for c in Complexity], default=None)
  cmd_pat.add_argument("--search", default=None, help="Match name, description or tags")
  cmd_pat.add_argument("--show", default=None, metavar="ID", help="Print the pattern rendered for --framework")

  # --- Command: FRAMEWORKS ---
  subparsers.add_parser("frameworks", help="List supported frameworks")

  # --- Command: SCAFFOLD ---
  cmd_scaf = subparsers.add_parser("scaffold", help="Emit a starter component animating one element")
  cmd_scaf.add_argument("name", help="Component name")
  cmd_scaf.add_argument("--framework", default="react", help="Target framework (default: react)")
  cmd_scaf.add_argument(
    "--prop",
    nargs="*",
    help="Animation props in key=value format; dotted keys nest (e.g. initial.opacity=0 animate.opacity=1)",
  )
  cmd_scaf.add_argument("--pattern", nargs="+", default=None, metavar="ID", help="Animation pattern(s) to apply")
  cmd_scaf.add_argument("--children", default=None, help="Element content")
  cmd_scaf.add_argument("--ts", action="store_true", help="Emit TypeScript")
  cmd_scaf.add_argument("--out", type=Path, help="Output file (default: stdout)")

  args = parser.parse_args(argv)

  if args.verbose:
    console.set_level(logging.DEBUG)

  if args.command == "generate":
    if args.path is None and args.template is None and args.pattern is None:
      parser.error("generate requires a PATH, --template or --pattern")
    return handlers.handle_generate(
      args.path,
      args.out,
      args.framework,
      args.target,
      args.ts,
      args.optimize,
      args.focus,
      parse_cli_key_values(args.config),
      template_id=args.template,
      pattern_ids=args.pattern,
      component_name=args.name,
    )

  elif args.command == "analyze":
    return handlers.handle_analyze(args.path, args.framework, args.focus, args.json)

  elif args.command == "optimize":
    return handlers.handle_optimize(args.path, args.out, args.framework, args.focus)

  elif args.command == "templates":
    return handlers.handle_templates(args.framework, args.category, args.complexity, args.show)

  elif args.command == "patterns":
    return handlers.handle_patterns(args.framework, args.category, args.complexity, args.search, args.show)

  elif args.command == "frameworks":
    return handlers.handle_frameworks()

  elif args.command == "scaffold":
    if args.pattern and args.prop:
      parser.error("scaffold takes either --pattern or --prop")
    return handlers.handle_scaffold(
      args.name,
      args.framework,
      parse_cli_key_values(args.prop),
      args.children,
      args.ts,
      args.out,
      pattern_ids=args.pattern,
    )

  return 0


if __name__ == "__main__":
  sys.exit(main())

"""
Dependency Import Injection.

Ensures the animation library of the target framework is imported whenever
the component animates anything:

1.  **Coalescing**: Existing declarations of the library source are folded
    into the first mergeable one, so the output never carries two statements
    for the same module.
2.  **Merging**: Missing bindings are added to that declaration rather than
    emitted as a second statement.
3.  **Insertion**: Without a declaration, a new statement is placed after the
    last import of the module (or at its top, after any ``'use client'``
    directive). Single-file components receive it inside their ``<script>``
    block, which is created when absent.

Names already bound locally (a declaration or an import from another module)
are never imported again, and a namespace import of the library counts as
providing every binding.
"""

import logging
import re
from typing import List, Optional, Set

from motion_switcheroo.core.component import ComponentAST, ImportDeclaration
from motion_switcheroo.core.context import GenerationContext
from motion_switcheroo.core.extraction import iter_animated_nodes
from motion_switcheroo.core.nodes import NodeArena, Prop, StructuralNode
from motion_switcheroo.core.rewriter.interface import RewriterPass
from motion_switcheroo.enums import NodeType
from motion_switcheroo.frameworks.base import ImportTraits

logger = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(r"\s*(['\"])use [\w ]+\1;?[ \t]*\n?")


def package_name(source: str) -> Optional[str]:
  """
  Returns the installable package of a module specifier.

  Args:
      source (str): e.g. ``framer-motion``, ``motion/react``, ``@vueuse/motion``.

  Returns:
      Optional[str]: The package name, None for relative or absolute paths.
  """
  if not source or source.startswith((".", "/")):
    return None
  parts = source.split("/")
  if source.startswith("@"):
    return "/".join(parts[:2])
  return parts[0]


def referenced_names(arena: NodeArena, root: int) -> Set[str]:
  """
  Collects element tags, their namespaces and call targets used in the tree.
  """
  names: Set[str] = set()
  for node in arena.walk(root):
    if node.type == NodeType.ELEMENT:
      tag = node.attributes.get("tag", "")
      names.add(tag)
      names.add(tag.split(".")[0])
    elif node.type == NodeType.CALL:
      names.add(node.attributes.get("callee", ""))
  return names


class ImportInjectionPass(RewriterPass):
  """
  Adds or merges the animation library import.
  """

  name = "import-injection"

  def __init__(self, traits: ImportTraits):
    self.traits = traits

  def apply(self, ast: ComponentAST, context: GenerationContext) -> None:
    arena = ast.arena
    if next(iter_animated_nodes(arena, ast.root_id), None) is None:
      return

    nodes = self._coalesce(arena, ast)
    declarations = [n.attributes["declaration"] for n in nodes]

    if not any(d.namespace for d in declarations):
      wanted = self._wanted_names(arena, ast.root_id)
      bound = self._bound_elsewhere(ast)
      missing = [
        name for name in wanted if name not in bound and not any(d.has_named(name) or name in d.locals for d in declarations)
      ]
      if missing:
        target = self._merge_target(declarations)
        if target is None:
          target = ImportDeclaration(source=self.traits.source, **self._style(ast))
          self._insert(ast, target)
        for name in missing:
          target.add_named(name)
        logger.debug(f"Imported {missing} from '{self.traits.source}'")

    context.record_import(self.traits.source)
    package = package_name(self.traits.source)
    if package:
      context.record_dependency(package)

  def _wanted_names(self, arena: NodeArena, root: int) -> List[str]:
    used = referenced_names(arena, root)
    wanted = list(self.traits.primary)
    wanted.extend(n for n in self.traits.companions if n in used)
    return list(dict.fromkeys(wanted))

  def _bound_elsewhere(self, ast: ComponentAST) -> Set[str]:
    bound = set(ast.declarations)
    for decl in ast.imports:
      if decl.source != self.traits.source:
        bound.update(decl.locals)
    return bound

  def _merge_target(self, declarations: List[ImportDeclaration]) -> Optional[ImportDeclaration]:
    for decl in declarations:
      if not decl.type_only and not decl.namespace:
        return decl
    # A type-only statement becomes a value import with inline type specifiers.
    for decl in declarations:
      if decl.type_only and not decl.default and not decl.namespace:
        decl.type_only = False
        for spec in decl.specifiers:
          spec.type_only = True
        return decl
    return None

  def _style(self, ast: ComponentAST) -> dict:
    existing = ast.imports
    if not existing:
      return {}
    return {"quote": existing[0].quote, "semicolon": existing[0].semicolon}

  # --- Coalescing ---

  def _coalesce(self, arena: NodeArena, ast: ComponentAST) -> List[StructuralNode]:
    """
    Folds duplicate declarations of the library source into one.

    Returns:
        List[StructuralNode]: The declaration nodes that remain.
    """
    kept: List[StructuralNode] = []
    for node in ast.import_nodes():
      decl = node.attributes["declaration"]
      if decl.source != self.traits.source:
        continue
      host = next((k for k in kept if k.attributes["declaration"].can_merge(decl)), None)
      if host is None:
        kept.append(node)
        continue
      host.attributes["declaration"].merge(decl)
      _remove_statement(arena, node.id)
      logger.debug(f"Merged duplicate import of '{decl.source}'")
    return kept

  # --- Insertion ---

  def _insert(self, ast: ComponentAST, decl: ImportDeclaration) -> None:
    arena = ast.arena
    root = ast.root
    import_node = StructuralNode(NodeType.IMPORT, {"declaration": decl, "line": None, "start": None})

    if root.attributes.get("mode") != "sfc":
      self._insert_into(arena, root.id, import_node, module_top=True)
      return

    script = _find_script(arena, root.id)
    if script is not None:
      self._insert_into(arena, script, import_node, module_top=False)
      return

    # No script block yet: append `<script setup>` holding the import.
    props = [Prop(name="setup")]
    if ast.typescript:
      props.append(Prop(name="lang", value='"ts"'))
    children = [
      arena.add(_text("\n")),
      arena.add(import_node),
      arena.add(_text("\n")),
    ]
    script_node = StructuralNode(
      NodeType.ELEMENT,
      {
        "tag": "script",
        "props": props,
        "tail": "",
        "self_closing": False,
        "void": False,
        "closing": "</script>",
        "line": None,
        "start": None,
      },
      children=children,
    )
    last = arena.children(root.id)[-1] if root.children else None
    ends_with_newline = last is not None and last.type == NodeType.TEXT and last.attributes["value"].endswith("\n")
    arena.add(_text("\n" if ends_with_newline else "\n\n"), parent=root.id)
    arena.add(script_node, parent=root.id)
    arena.add(_text("\n"), parent=root.id)

  def _insert_into(self, arena: NodeArena, container: int, import_node: StructuralNode, module_top: bool) -> None:
    children = arena.get(container).children
    last_import = None
    for pos, child in enumerate(children):
      if arena.get(child).type == NodeType.IMPORT:
        last_import = pos

    if last_import is not None:
      arena.add(_text("\n"), parent=container, index=last_import + 1)
      arena.add(import_node, parent=container, index=last_import + 2)
      return

    if not module_top:
      arena.add(_text("\n"), parent=container, index=0)
      arena.add(import_node, parent=container, index=1)
      if len(children) == 2:
        arena.add(_text("\n"), parent=container)
      return

    index = _split_directive(arena, container)
    following = arena.get(children[index]) if index < len(children) else None
    separated = following is not None and following.type == NodeType.TEXT and following.attributes["value"].startswith("\n")
    arena.add(import_node, parent=container, index=index)
    arena.add(_text("\n" if separated or following is None else "\n\n"), parent=container, index=index + 1)


def _text(value: str) -> StructuralNode:
  return StructuralNode(NodeType.TEXT, {"value": value, "start": None})


def _find_script(arena: NodeArena, root: int) -> Optional[int]:
  scripts = [
    c for c in arena.children(root) if c.type == NodeType.ELEMENT and c.attributes.get("tag", "").lower() == "script"
  ]
  if not scripts:
    return None
  preferred = next((s for s in scripts if s.has_prop("setup")), scripts[0])
  return preferred.id


def _split_directive(arena: NodeArena, container: int) -> int:
  """
  Splits a leading ``'use client';`` directive off the first text run.

  Returns:
      int: Child index at which module-level imports may be inserted.
  """
  children = arena.get(container).children
  if not children:
    return 0
  first = arena.get(children[0])
  if first.type != NodeType.TEXT:
    return 0
  value = first.attributes["value"]
  match = _DIRECTIVE_RE.match(value)
  if not match:
    return 0
  head, rest = value[: match.end()], value[match.end() :]
  first.attributes["value"] = head
  if rest:
    start = first.attributes.get("start")
    rest_start = start + len(head) if start is not None else None
    arena.add(StructuralNode(NodeType.TEXT, {"value": rest, "start": rest_start}), parent=container, index=1)
  return 1


def _remove_statement(arena: NodeArena, idx: int) -> None:
  """Detaches an import node together with the line break that ended it."""
  parent = arena.parent(idx)
  if parent is not None:
    siblings = arena.get(parent).children
    pos = siblings.index(idx)
    if pos + 1 < len(siblings):
      following = arena.get(siblings[pos + 1])
      value = following.attributes.get("value", "")
      if following.type == NodeType.TEXT and value.startswith("\n"):
        following.attributes["value"] = value[1:]
        if following.attributes.get("start") is not None:
          following.attributes["start"] += 1
        if not following.attributes["value"]:
          arena.detach(following.id)
  arena.detach(idx)



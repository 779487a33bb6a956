"""
Tree Serializer.

Renders a structural tree back to source text. Untouched nodes reproduce
their original text exactly; rewritten import declarations are rendered in
canonical form.

The serializer walks the tree with an explicit work stack holding either node
indices or literal text pieces, so deeply nested markup never hits the
interpreter recursion limit.
"""

from bisect import bisect_right
from typing import List, Optional, Tuple, Union

from motion_switcheroo.core.nodes import NodeArena, StructuralNode
from motion_switcheroo.enums import NodeType

Piece = Tuple[str, Optional[int]]
WorkItem = Union[int, Piece]


class Serializer:
  """
  Converts a NodeArena subtree into text.

  Attributes:
      arena (NodeArena): Node storage.
      comments (bool): Whether comment nodes are emitted.
  """

  def __init__(self, arena: NodeArena, comments: bool = True):
    self.arena = arena
    self.comments = comments

  def pieces(self, root: int) -> List[Piece]:
    """
    Flattens a subtree into text pieces tagged with their source offset.

    Args:
        root (int): Index of the subtree root.

    Returns:
        List[Piece]: ``(text, source_offset)`` pairs in output order.
    """
    out: List[Piece] = []
    stack: List[WorkItem] = [root]
    while stack:
      item = stack.pop()
      if isinstance(item, tuple):
        if item[0]:
          out.append(item)
        continue
      stack.extend(reversed(self._parts(self.arena.get(item))))
    return out

  def render(self, root: int) -> str:
    return "".join(text for text, _ in self.pieces(root))

  def render_children(self, idx: int) -> str:
    """Renders the children of a node without the node's own delimiters."""
    return "".join(self.render(child) for child in self.arena.get(idx).children)

  def _parts(self, node: StructuralNode) -> List[WorkItem]:
    attrs = node.attributes
    start = attrs.get("start")

    if node.type == NodeType.TEXT:
      return [(attrs["value"], start)]

    if node.type == NodeType.COMMENT:
      if self.comments:
        return [(attrs["value"], start)]
      # A dropped inline block comment must still separate its neighbours.
      return [(" ", None)] if attrs.get("style") == "block" and "\n" not in attrs["value"] else []

    if node.type == NodeType.IMPORT:
      declaration = attrs["declaration"]
      rendered = declaration.to_source()
      if rendered == attrs.get("canonical") and "raw" in attrs:
        return [(attrs["raw"], start)]
      return [(rendered, start)]

    if node.type == NodeType.PROGRAM:
      return list(node.children)

    if node.type == NodeType.EXPRESSION:
      return [("{", start), *node.children, ("}", None)]

    if node.type == NodeType.CALL:
      return [(f"{attrs['callee']}{attrs.get('gap', '')}(", start), *node.children, (")", None)]

    if node.type == NodeType.ELEMENT:
      return self._element_parts(node)

    raise ValueError(f"Unknown node type: {node.type}")

  def _element_parts(self, node: StructuralNode) -> List[WorkItem]:
    attrs = node.attributes
    parts: List[WorkItem] = [(f"<{attrs['tag']}", attrs.get("start"))]
    for prop in node.props:
      if prop.is_spread:
        parts.extend([(prop.leading, None), prop.expression])
        continue
      parts.append((f"{prop.leading}{prop.name}", None))
      if prop.expression is not None:
        parts.extend([(prop.separator, None), prop.expression])
      elif prop.value is not None:
        parts.append((f"{prop.separator}{prop.value}", None))

    tail = attrs.get("tail", "")
    if attrs.get("self_closing"):
      parts.append((f"{tail}/>", None))
      return parts
    parts.append((f"{tail}>", None))
    if attrs.get("void"):
      return parts
    parts.extend(node.children)
    parts.append((attrs.get("closing") or f"</{attrs['tag']}>", None))
    return parts


def serialize(arena: NodeArena, root: int, comments: bool = True) -> str:
  """
  Renders a subtree to source text.

  Args:
      arena (NodeArena): Node storage.
      root (int): Subtree root.
      comments (bool): Emit comment nodes.

  Returns:
      str: The source text.
  """
  return Serializer(arena, comments=comments).render(root)


def line_origins(pieces: List[Piece], source: str) -> List[Optional[int]]:
  """
  Maps every output line to the 0-based source line it came from.

  A line takes the origin of the first piece that starts on it; lines inside a
  multi-line piece continue from that piece's origin.

  Args:
      pieces (List[Piece]): Serializer output.
      source (str): The original source text.

  Returns:
      List[Optional[int]]: One entry per output line (None when synthesized).
  """
  line_starts = [0]
  for i, ch in enumerate(source):
    if ch == "\n":
      line_starts.append(i + 1)

  origins: List[Optional[int]] = [None]
  for text, offset in pieces:
    base = bisect_right(line_starts, offset) - 1 if offset is not None else None
    for k, segment in enumerate(text.split("\n")):
      if k > 0:
        origins.append(base + k if base is not None else None)
      elif origins[-1] is None and base is not None and segment.strip():
        origins[-1] = base
  return origins


def minify(code: str, origins: Optional[List[Optional[int]]] = None) -> Tuple[str, Optional[List[Optional[int]]]]:
  """
  Strips indentation and drops blank lines.

  Args:
      code (str): Source text.
      origins (Optional[List[Optional[int]]]): Line origins to keep aligned.

  Returns:
      Tuple[str, Optional[List[Optional[int]]]]: Minified text and origins.
  """
  kept_lines: List[str] = []
  kept_origins: List[Optional[int]] = []
  for idx, line in enumerate(code.split("\n")):
    stripped = line.strip()
    if not stripped:
      continue
    kept_lines.append(stripped)
    if origins is not None:
      kept_origins.append(origins[idx] if idx < len(origins) else None)
  return "\n".join(kept_lines), (kept_origins if origins is not None else None)

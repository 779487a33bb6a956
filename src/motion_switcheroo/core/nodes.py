"""
Structural Tree Storage.

Nodes live in a `NodeArena` and reference each other by integer index. Parent
links are kept in a separate map rather than on the node, so the structure has
no identity cycles and can be deep-copied cheaply per request.

Node kinds (`NodeType`):

- ``Program``: root container.
- ``Text``: verbatim source fragment (``value``).
- ``Comment``: line, block or HTML comment (``value``), droppable at emission.
- ``ImportDeclaration``: a parsed ``import`` statement (``declaration``).
- ``Element``: markup element (``tag``, ``props``, ``self_closing``, ``void``).
- ``ExpressionContainer``: ``{ ... }`` embedded in markup; children are code.
- ``CallExpression``: ``callee(...)``; children are the argument code.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from motion_switcheroo.enums import NodeType


@dataclass
class Prop:
  """
  One attribute of a markup element.

  Attributes:
      name (str): Attribute name as written (``animate``, ``:initial``, ``@click``).
          Spread attributes use the name ``...``.
      value (Optional[str]): Raw value text including quotes (``"a"``). ``None``
          for boolean shorthand (``layout``) and for expression values, which
          are held by the node referenced in `expression`.
      leading (str): Whitespace preceding the attribute.
      expression (Optional[int]): Arena index of the ExpressionContainer holding a
          ``{...}`` value.
      separator (str): Text between name and value, normally ``=``.
  """

  name: str
  value: Optional[str] = None
  leading: str = " "
  expression: Optional[int] = None
  separator: str = "="

  @property
  def is_spread(self) -> bool:
    return self.name == "..."

  @property
  def is_string(self) -> bool:
    return self.value is not None and self.value[:1] in ("'", '"')

  @property
  def string_value(self) -> Optional[str]:
    """Unquoted content of a string-valued attribute."""
    if not self.is_string:
      return None
    return self.value[1:-1]


@dataclass
class StructuralNode:
  """
  A single element of the structural tree.

  Attributes:
      type (NodeType): The node kind.
      attributes (Dict[str, Any]): Kind-specific payload.
      children (List[int]): Arena indices of child nodes, in source order.
      id (Optional[int]): Arena index, ``None`` until the node is adopted.
  """

  type: NodeType
  attributes: Dict[str, Any] = field(default_factory=dict)
  children: List[int] = field(default_factory=list)
  id: Optional[int] = None

  @property
  def props(self) -> List[Prop]:
    return self.attributes.get("props", [])

  def get_prop(self, *names: str) -> Optional[Prop]:
    """
    Returns the first attribute whose name is in `names`.

    Args:
        *names (str): Candidate attribute names.

    Returns:
        Optional[Prop]: The matching attribute, if any.
    """
    for prop in self.props:
      if prop.name in names:
        return prop
    return None

  def has_prop(self, *names: str) -> bool:
    return self.get_prop(*names) is not None


NodeLike = Union[StructuralNode, Sequence[StructuralNode]]


class NodeArena:
  """
  Index-addressed node storage with an external parent map.

  Detached nodes stay in `nodes` but are unreachable from the root; traversal
  only follows child links so they are never visited.
  """

  def __init__(self) -> None:
    self.nodes: List[StructuralNode] = []
    self.parents: Dict[int, Optional[int]] = {}

  def __len__(self) -> int:
    return len(self.nodes)

  def add(self, node: StructuralNode, parent: Optional[int] = None, index: Optional[int] = None) -> int:
    """
    Adopts `node` into the arena, optionally attaching it to `parent`.

    Children already listed on the node are re-parented to it.

    Args:
        node (StructuralNode): A node without an id.
        parent (Optional[int]): Index of the parent to attach to.
        index (Optional[int]): Position among the parent's children (append if None).

    Returns:
        int: The new node index.
    """
    if node.id is not None:
      raise ValueError(f"Node already adopted with id {node.id}")
    node.id = len(self.nodes)
    self.nodes.append(node)
    self.parents[node.id] = None
    for child in node.children:
      self.parents[child] = node.id
    for prop in node.props:
      if prop.expression is not None:
        self.parents[prop.expression] = node.id
    if parent is not None:
      siblings = self.nodes[parent].children
      if index is None:
        siblings.append(node.id)
      else:
        siblings.insert(index, node.id)
      self.parents[node.id] = parent
    return node.id

  def get(self, idx: int) -> StructuralNode:
    return self.nodes[idx]

  def parent(self, idx: int) -> Optional[int]:
    return self.parents.get(idx)

  def children(self, idx: int) -> List[StructuralNode]:
    return [self.nodes[c] for c in self.nodes[idx].children]

  def child_ids(self, idx: int) -> List[int]:
    """
    Lists every structural child of a node.

    For elements this includes the expression containers of attribute values
    (first, in attribute order) followed by the regular children.
    """
    node = self.nodes[idx]
    ids = [p.expression for p in node.props if p.expression is not None]
    ids.extend(node.children)
    return ids

  def walk(self, root: int) -> Iterator[StructuralNode]:
    """
    Pre-order traversal using an explicit stack.

    Args:
        root (int): Index to start from.

    Yields:
        StructuralNode: Nodes in source order.
    """
    stack = [root]
    while stack:
      idx = stack.pop()
      yield self.nodes[idx]
      stack.extend(reversed(self.child_ids(idx)))

  def ancestors(self, idx: int) -> Iterator[StructuralNode]:
    current = self.parents.get(idx)
    while current is not None:
      yield self.nodes[current]
      current = self.parents.get(current)

  def is_attached(self, idx: int, root: int) -> bool:
    """Whether `idx` is still reachable from `root` through parent links."""
    current: Optional[int] = idx
    while current is not None:
      if current == root:
        return True
      current = self.parents.get(current)
    return False

  def find(self, root: int, node_type: NodeType) -> List[StructuralNode]:
    return [n for n in self.walk(root) if n.type == node_type]

  def replace(self, idx: int, replacements: NodeLike) -> List[int]:
    """
    Splices `replacements` into the position currently held by `idx`.

    Replacement nodes may be new (no id) or existing nodes. Returning the
    original node alone is a no-op.

    Args:
        idx (int): Node to replace.
        replacements (NodeLike): One node or an ordered list of nodes.

    Returns:
        List[int]: Indices now occupying the position.

    Raises:
        ValueError: If `idx` is the root, or a multi-node splice targets an
            attribute expression slot.
    """
    items = [replacements] if isinstance(replacements, StructuralNode) else list(replacements)
    if len(items) == 1 and items[0].id == idx:
      return [idx]

    parent = self.parents.get(idx)
    if parent is None:
      raise ValueError("Cannot replace a detached or root node")

    new_ids = [n.id if n.id is not None else self.add(n) for n in items]
    for new_id in new_ids:
      self.parents[new_id] = parent

    parent_node = self.nodes[parent]
    if idx in parent_node.children:
      pos = parent_node.children.index(idx)
      parent_node.children[pos : pos + 1] = new_ids
    else:
      if len(new_ids) != 1:
        raise ValueError("Attribute expressions accept exactly one replacement node")
      for prop in parent_node.props:
        if prop.expression == idx:
          prop.expression = new_ids[0]

    if idx not in new_ids:
      self.parents[idx] = None
    return new_ids

  def insert_child(self, parent: int, index: int, node: StructuralNode) -> int:
    return self.add(node, parent=parent, index=index)

  def detach(self, idx: int) -> None:
    parent = self.parents.get(idx)
    if parent is not None:
      siblings = self.nodes[parent].children
      if idx in siblings:
        siblings.remove(idx)
    self.parents[idx] = None

  def clone(self) -> "NodeArena":
    """
    Returns:
        NodeArena: A deep copy sharing no mutable state with this arena.
    """
    other = NodeArena()
    other.nodes = copy.deepcopy(self.nodes)
    other.parents = dict(self.parents)
    return other

"""
Tests for the Node Arena.

Verifies:
1. Adoption assigns indices and parent links.
2. Pre-order traversal includes attribute expressions before children.
3. Splicing replacements (single, multiple, no-op).
4. Detachment and cloning isolation.
"""

import pytest

from motion_switcheroo.core.nodes import NodeArena, Prop, StructuralNode
from motion_switcheroo.enums import NodeType


def _text(value: str) -> StructuralNode:
  return StructuralNode(NodeType.TEXT, {"value": value})


@pytest.fixture
def tree():
  """
  Program
  ├── Text 'a'
  └── Element div (prop expression -> Expression)
      └── Text 'b'
  """
  arena = NodeArena()
  root = arena.add(StructuralNode(NodeType.PROGRAM))
  a = arena.add(_text("a"), parent=root)
  expr = arena.add(StructuralNode(NodeType.EXPRESSION))
  element = arena.add(
    StructuralNode(NodeType.ELEMENT, {"tag": "div", "props": [Prop(name="animate", expression=expr)]}),
    parent=root,
  )
  b = arena.add(_text("b"), parent=element)
  return arena, {"root": root, "a": a, "expr": expr, "element": element, "b": b}


def test_add_links_parent(tree):
  arena, ids = tree
  assert len(arena) == 5
  assert arena.parent(ids["a"]) == ids["root"]
  assert arena.parent(ids["expr"]) == ids["element"]
  assert arena.parent(ids["root"]) is None


def test_add_rejects_adopted_node(tree):
  arena, ids = tree
  with pytest.raises(ValueError):
    arena.add(arena.get(ids["a"]))


def test_walk_visits_prop_expressions_first(tree):
  arena, ids = tree
  order = [n.id for n in arena.walk(ids["root"])]
  assert order == [ids["root"], ids["a"], ids["element"], ids["expr"], ids["b"]]


def test_ancestors_and_attachment(tree):
  arena, ids = tree
  assert [n.id for n in arena.ancestors(ids["b"])] == [ids["element"], ids["root"]]
  assert arena.is_attached(ids["b"], ids["root"])


def test_get_prop_and_has_prop(tree):
  arena, ids = tree
  element = arena.get(ids["element"])
  assert element.has_prop("animate")
  assert element.get_prop("missing", "animate").name == "animate"
  assert not element.has_prop("initial")


def test_prop_string_helpers():
  assert Prop(name="class", value='"box"').string_value == "box"
  assert Prop(name="x", value="12").string_value is None
  assert Prop(name="...").is_spread


def test_replace_single_node(tree):
  arena, ids = tree
  new_ids = arena.replace(ids["a"], _text("z"))
  root = arena.get(ids["root"])
  assert root.children[0] == new_ids[0]
  assert arena.get(new_ids[0]).attributes["value"] == "z"
  assert not arena.is_attached(ids["a"], ids["root"])


def test_replace_with_sequence_splices(tree):
  arena, ids = tree
  new_ids = arena.replace(ids["a"], [_text("x"), _text("y")])
  assert arena.get(ids["root"]).children == [*new_ids, ids["element"]]


def test_replace_self_is_noop(tree):
  arena, ids = tree
  node = arena.get(ids["a"])
  assert arena.replace(ids["a"], node) == [ids["a"]]
  assert arena.get(ids["root"]).children[0] == ids["a"]


def test_replace_expression_slot(tree):
  arena, ids = tree
  (new_id,) = arena.replace(ids["expr"], StructuralNode(NodeType.EXPRESSION))
  assert arena.get(ids["element"]).props[0].expression == new_id

  with pytest.raises(ValueError):
    arena.replace(new_id, [_text("1"), _text("2")])


def test_replace_root_fails(tree):
  arena, ids = tree
  with pytest.raises(ValueError):
    arena.replace(ids["root"], _text("x"))


def test_detach(tree):
  arena, ids = tree
  arena.detach(ids["element"])
  assert ids["element"] not in arena.get(ids["root"]).children
  assert not arena.is_attached(ids["b"], ids["root"])
  assert [n.id for n in arena.walk(ids["root"])] == [ids["root"], ids["a"]]


def test_clone_is_independent(tree):
  arena, ids = tree
  copy = arena.clone()
  copy.get(ids["a"]).attributes["value"] = "changed"
  copy.detach(ids["element"])

  assert arena.get(ids["a"]).attributes["value"] == "a"
  assert ids["element"] in arena.get(ids["root"]).children


def test_find(tree):
  arena, ids = tree
  texts = arena.find(ids["root"], NodeType.TEXT)
  assert [n.attributes["value"] for n in texts] == ["a", "b"]

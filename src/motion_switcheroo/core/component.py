"""
Component-level Data Model.

Defines the parsed representation handed between pipeline stages:

- `ComponentAST`: the structural tree plus extracted metadata.
- `ImportDeclaration` / `ExportDeclaration`: module interface records.
- `AnimatedElement`: a recognized usage of the animation namespace.
- `ParseOptions`: parser flags.

`ComponentAST.imports` is derived from the tree on access, so injected imports
are visible immediately and can never drift from the emitted code.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from motion_switcheroo.core.nodes import NodeArena, StructuralNode
from motion_switcheroo.enums import ExportKind, Framework, NodeType, SpecifierKind

UNNAMED_COMPONENT = "UnnamedComponent"


@dataclass
class ImportSpecifier:
  kind: SpecifierKind
  local: str
  imported: Optional[str] = None
  type_only: bool = False

  def to_source(self) -> str:
    if self.kind == SpecifierKind.NAMESPACE:
      return f"* as {self.local}"
    if self.kind == SpecifierKind.DEFAULT:
      return self.local
    prefix = "type " if self.type_only else ""
    imported = self.imported or self.local
    if imported == self.local:
      return f"{prefix}{imported}"
    return f"{prefix}{imported} as {self.local}"


@dataclass
class ImportDeclaration:
  """
  A module import.

  Attributes:
      source (str): Module specifier (``'framer-motion'``).
      specifiers (List[ImportSpecifier]): Bindings in source order.
      type_only (bool): ``import type ...`` (TypeScript).
      quote (str): Quote character used for the source string.
      semicolon (bool): Whether the statement ends with ``;``.
  """

  source: str
  specifiers: List[ImportSpecifier] = field(default_factory=list)
  type_only: bool = False
  quote: str = "'"
  semicolon: bool = True

  @property
  def locals(self) -> List[str]:
    return [s.local for s in self.specifiers]

  @property
  def default(self) -> Optional[ImportSpecifier]:
    return next((s for s in self.specifiers if s.kind == SpecifierKind.DEFAULT), None)

  @property
  def namespace(self) -> Optional[ImportSpecifier]:
    return next((s for s in self.specifiers if s.kind == SpecifierKind.NAMESPACE), None)

  @property
  def named(self) -> List[ImportSpecifier]:
    return [s for s in self.specifiers if s.kind == SpecifierKind.NAMED]

  def has_named(self, name: str) -> bool:
    return any((s.imported or s.local) == name for s in self.named)

  def add_named(self, name: str) -> bool:
    """
    Adds a named specifier unless an equivalent one exists.

    Args:
        name (str): The exported name to bind under the same local name.

    Returns:
        bool: True if the declaration changed.
    """
    if self.has_named(name) or name in self.locals:
      return False
    self.specifiers.append(ImportSpecifier(kind=SpecifierKind.NAMED, imported=name, local=name))
    return True

  def can_merge(self, other: "ImportDeclaration") -> bool:
    """
    Checks whether `other` can be folded into this declaration.

    Namespace imports cannot share a statement with named bindings, and a
    statement can hold at most one default binding.
    """
    if self.source != other.source or self.type_only != other.type_only:
      return False
    if self.namespace or other.namespace:
      return False
    return not (self.default and other.default and self.default.local != other.default.local)

  def merge(self, other: "ImportDeclaration") -> None:
    if other.default and not self.default:
      self.specifiers.insert(0, other.default)
    for spec in other.named:
      if spec.local not in self.locals:
        self.specifiers.append(spec)

  def to_source(self) -> str:
    """
    Renders the declaration as a single statement.

    Returns:
        str: e.g. ``import { motion } from 'framer-motion';``
    """
    head = "import type " if self.type_only else "import "
    end = ";" if self.semicolon else ""
    quoted = f"{self.quote}{self.source}{self.quote}"

    parts: List[str] = []
    if self.default:
      parts.append(self.default.to_source())
    if self.namespace:
      parts.append(self.namespace.to_source())
    named = self.named
    if named:
      parts.append("{ " + ", ".join(s.to_source() for s in named) + " }")

    if not parts:
      return f"{head}{quoted}{end}"
    return f"{head}{', '.join(parts)} from {quoted}{end}"


@dataclass
class ExportSpecifier:
  exported: str
  local: str


@dataclass
class ExportDeclaration:
  kind: ExportKind
  declaration: Optional[str] = None
  specifiers: Optional[List[ExportSpecifier]] = None

  @property
  def label(self) -> str:
    """Display name used in generation results."""
    if self.declaration:
      return self.declaration
    if self.specifiers:
      return ", ".join(s.exported for s in self.specifiers)
    return self.kind.value


@dataclass(frozen=True)
class OpaqueValue:
  """
  Placeholder for a prop expression that cannot be resolved statically.

  Attributes:
      raw (str): The original expression text.
  """

  raw: str

  def __str__(self) -> str:
    return "[Complex Expression]"


def is_opaque(value: Any) -> bool:
  return isinstance(value, OpaqueValue)


@dataclass
class AnimatedElement:
  """
  Attributes:
      tag (str): ``motion.div``, ``Motion``, the host tag of a ``v-motion``
          element, or ``animate`` for calls.
      props (Dict[str, Any]): Literal prop values in declaration order. Calls
          report their arguments under ``arguments``.
      line (Optional[int]): 1-based source line.
  """

  tag: str
  props: Dict[str, Any] = field(default_factory=dict)
  line: Optional[int] = None

  @property
  def has_opaque_values(self) -> bool:
    stack: List[Any] = list(self.props.values())
    while stack:
      value = stack.pop()
      if is_opaque(value):
        return True
      if isinstance(value, dict):
        stack.extend(value.values())
      elif isinstance(value, list):
        stack.extend(value)
    return False


@dataclass
class ParseOptions:
  """
  Parser flags.

  Attributes:
      framework (Framework): Source framework; strings are resolved eagerly.
      typescript (bool): Source uses TypeScript syntax.
      jsx (Optional[bool]): Force markup parsing on/off; defaults per framework.
      plugins (List[str]): Extra syntax extensions (``jsx``, ``typescript``,
          ``vue-template``, ``decorators``).
  """

  framework: Framework
  typescript: bool = False
  jsx: Optional[bool] = None
  plugins: List[str] = field(default_factory=list)

  def __post_init__(self) -> None:
    self.framework = Framework.resolve(self.framework)


@dataclass
class ComponentAST:
  """
  A parsed component.

  Attributes:
      framework (Framework): Framework the source was parsed as. Immutable.
      component_name (str): Resolved component identifier.
      arena (NodeArena): Node storage owned by this pipeline run.
      root_id (int): Index of the Program node.
      exports (List[ExportDeclaration]): Module exports in source order.
      typescript (bool): TypeScript flag the source was parsed with.
      declarations (List[str]): Top-level declared identifiers.
      source (str): The original source text.
  """

  framework: Framework
  component_name: str
  arena: NodeArena
  root_id: int
  exports: List[ExportDeclaration] = field(default_factory=list)
  typescript: bool = False
  declarations: List[str] = field(default_factory=list)
  source: str = ""

  def __setattr__(self, name: str, value: Any) -> None:
    if name == "framework" and "framework" in self.__dict__:
      raise AttributeError("ComponentAST.framework is immutable once parsed")
    super().__setattr__(name, value)

  @property
  def root(self) -> StructuralNode:
    return self.arena.get(self.root_id)

  @property
  def imports(self) -> List[ImportDeclaration]:
    return [n.attributes["declaration"] for n in self.arena.walk(self.root_id) if n.type == NodeType.IMPORT]

  def import_nodes(self) -> List[StructuralNode]:
    return self.arena.find(self.root_id, NodeType.IMPORT)

  def bound_names(self) -> List[str]:
    """All identifiers bound by imports or top-level declarations."""
    names: List[str] = []
    for decl in self.imports:
      names.extend(decl.locals)
    names.extend(self.declarations)
    return names

  def copy(self) -> "ComponentAST":
    """
    Returns:
        ComponentAST: An independent copy with a cloned arena.
    """
    return ComponentAST(
      framework=self.framework,
      component_name=self.component_name,
      arena=self.arena.clone(),
      root_id=self.root_id,
      exports=list(self.exports),
      typescript=self.typescript,
      declarations=list(self.declarations),
      source=self.source,
    )

"""
Base Protocol and Registry for Framework Capability Descriptors.

A framework adapter bundles everything that differs between output
ecosystems (parse hints, rewrite rules, import sources, interaction prop
names, layout hint, emitter normalization, formatter parser and bundle cost
table). The pipeline resolves one adapter per request instead of switching on
the framework key at every stage.
"""

import importlib
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Type

from pydantic import BaseModel, Field

from motion_switcheroo.enums import Framework
from motion_switcheroo.errors import UnsupportedFrameworkError

if TYPE_CHECKING:
  from motion_switcheroo.core.component import ComponentAST
  from motion_switcheroo.core.context import GenerationContext
  from motion_switcheroo.core.rewriter.rules import TransformationRule


class MarkupDialect(str, Enum):
  JSX = "jsx"  # className, htmlFor, onClick={...}
  TEMPLATE = "template"  # class, for, @click="..."


class ParseHints(BaseModel):
  """
  Flags guiding the structural parser.
  """

  sfc: bool = Field(False, description="Top-level markup is parsed as single-file-component blocks.")
  component_style: bool = Field(
    False,
    description="Components are named functions/classes, so an uppercase declaration names the component.",
  )


class ImportTraits(BaseModel):
  """
  Describes the animation library import injected into generated code.
  """

  source: str = Field(description="Module specifier of the animation library.")
  primary: List[str] = Field(default_factory=list, description="Names imported whenever animation is used.")
  companions: List[str] = Field(
    default_factory=list,
    description="Names imported only when the code references them.",
  )


class InteractionTraits(BaseModel):
  """
  Prop names for interaction triggers in the framework's markup dialect.
  """

  hover: List[str] = Field(default_factory=list)
  tap: List[str] = Field(default_factory=list)
  focus: List[str] = Field(default_factory=list)
  click: List[str] = Field(default_factory=list)

  @property
  def triggers(self) -> List[str]:
    return [*self.hover, *self.tap, *self.focus, *self.click]


class LayoutHint(BaseModel):
  """
  The layout-isolation attribute added by the performance enhancement pass.
  """

  prop: str = Field(description="Attribute name (e.g. 'layoutRoot').")
  value: str = Field(description="Raw attribute value including quotes or braces.")
  triggers: List[str] = Field(description="Props whose presence marks an element as transform-affecting.")
  conflicts: List[str] = Field(default_factory=list, description="Existing props that make the hint redundant.")


class FrameworkAdapter(Protocol):
  """
  Protocol definition for a Framework capability descriptor.
  """

  key: Framework
  display_name: str
  package: str

  @property
  def parse_hints(self) -> ParseHints: ...

  @property
  def markup_dialect(self) -> MarkupDialect: ...

  @property
  def import_traits(self) -> ImportTraits: ...

  @property
  def interaction(self) -> InteractionTraits: ...

  @property
  def layout_hint(self) -> Optional[LayoutHint]: ...

  @property
  def cost_table(self) -> Dict[str, int]: ...

  @property
  def tracked_modules(self) -> List[str]: ...

  def rules(self) -> List["TransformationRule"]: ...

  def formatter_parser(self, typescript: bool) -> str: ...

  def file_extension(self, typescript: bool) -> str: ...

  def normalize(self, code: str, ast: "ComponentAST", context: "GenerationContext") -> str: ...

  def scaffold(self, component_name: str, motion_props: Dict[str, Any], children: Optional[str], typescript: bool) -> str: ...


_ADAPTER_REGISTRY: Dict[str, Type[FrameworkAdapter]] = {}


def register_framework(name: str):
  def wrapper(cls):
    _ADAPTER_REGISTRY[name] = cls
    return cls

  return wrapper


def _ensure_discovered() -> None:
  # Importing the package runs adapter discovery exactly once.
  importlib.import_module("motion_switcheroo.frameworks")


def get_adapter(name: Any) -> Optional[FrameworkAdapter]:
  _ensure_discovered()
  key = name.value if isinstance(name, Framework) else str(name).lower().strip()
  cls = _ADAPTER_REGISTRY.get(key)
  if cls:
    return cls()
  return None


def resolve_adapter(framework: Any) -> FrameworkAdapter:
  """
  Returns the adapter for a framework key, rejecting unknown keys.

  Args:
      framework (Any): A `Framework` member or its string key.

  Returns:
      FrameworkAdapter: The capability descriptor.

  Raises:
      UnsupportedFrameworkError: If no adapter is registered for the key.
  """
  adapter = get_adapter(framework)
  if adapter is None:
    raise UnsupportedFrameworkError(framework, available_frameworks())
  return adapter


def available_frameworks() -> List[str]:
  """
  Returns:
      List[str]: Registered framework keys in declaration order of `Framework`.
  """
  _ensure_discovered()
  order = Framework.values()
  return sorted(_ADAPTER_REGISTRY.keys(), key=lambda k: (order.index(k) if k in order else len(order), k))

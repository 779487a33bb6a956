"""
Enumerations for motion-switcheroo.

This module defines the closed sets used across the pipeline: supported
target frameworks, structural node kinds, import/export flavours and the
severity scale shared by all optimizers.
"""

from enum import Enum
from typing import Any, List

from motion_switcheroo.errors import UnsupportedFrameworkError


class Framework(str, Enum):
  """
  Supported output component ecosystems.

  The set is closed: requests for anything else are rejected with
  `UnsupportedFrameworkError` before parsing starts.
  """

  REACT = "react"  # framer-motion / JSX
  VUE = "vue"  # @vueuse/motion / SFC templates
  JS = "js"  # motion (vanilla animate() calls)

  @classmethod
  def values(cls) -> List[str]:
    return [member.value for member in cls]

  @classmethod
  def resolve(cls, value: Any) -> "Framework":
    """
    Normalizes a user-supplied framework key.

    Args:
        value (Any): A `Framework` member or its string key (case-insensitive).

    Returns:
        Framework: The matching member.

    Raises:
        UnsupportedFrameworkError: If the key is outside the closed set.
    """
    if isinstance(value, cls):
      return value
    key = str(value).lower().strip() if value is not None else ""
    for member in cls:
      if member.value == key:
        return member
    raise UnsupportedFrameworkError(value, cls.values())


class NodeType(str, Enum):
  """Kinds of structural node stored in a `NodeArena`."""

  PROGRAM = "Program"
  TEXT = "Text"
  COMMENT = "Comment"
  IMPORT = "ImportDeclaration"
  ELEMENT = "Element"
  EXPRESSION = "ExpressionContainer"
  CALL = "CallExpression"


class SpecifierKind(str, Enum):
  DEFAULT = "default"
  NAMED = "named"
  NAMESPACE = "namespace"


class ExportKind(str, Enum):
  DEFAULT = "default"
  NAMED = "named"


class SuggestionKind(str, Enum):
  """Category of an optimizer suggestion."""

  PERFORMANCE = "performance"
  ACCESSIBILITY = "accessibility"
  BUNDLE_SIZE = "bundle-size"


class Severity(str, Enum):
  LOW = "low"
  MEDIUM = "medium"
  HIGH = "high"
  CRITICAL = "critical"


class TemplateCategory(str, Enum):
  COMPONENT = "component"
  LAYOUT = "layout"
  ANIMATION = "animation"
  INTERACTION = "interaction"
  UTILITY = "utility"


class Complexity(str, Enum):
  BASIC = "basic"
  INTERMEDIATE = "intermediate"
  ADVANCED = "advanced"


class PatternCategory(str, Enum):
  """Animation pattern families."""

  ENTRANCE = "entrance"
  EXIT = "exit"
  GESTURE = "gesture"
  LAYOUT = "layout"
  SCROLL = "scroll"
  STAGGER = "stagger"
  COMPLEX = "complex"

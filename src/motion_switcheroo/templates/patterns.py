"""
Animation Pattern Library.

Reusable animation configurations (fade, slide, hover, drag, scroll, stagger,
...) described once in ``patterns.json`` and rendered for any framework the
pattern supports. Rendering goes through `scaffold_component`, so a pattern
produces the same starter component shape as the ``scaffold`` command.

Several patterns can be combined into one component: their ``initial`` and
``animate`` targets are merged in order, and the transition with the longest
duration wins.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from motion_switcheroo.core.generator import scaffold_component
from motion_switcheroo.enums import Complexity, Framework, PatternCategory
from motion_switcheroo.errors import PatternNotFoundError, UnsupportedFrameworkError
from motion_switcheroo.templates.store import resolve_templates_dir

logger = logging.getLogger(__name__)

PATTERNS_FILE = "patterns.json"
DEFAULT_COMPONENT_NAME = "AnimatedComponent"
DEFAULT_TRANSITION: Dict[str, Any] = {"duration": 0.3, "ease": "easeOut"}

# Gesture targets usable as one-shot keyframes when a pattern has no ``animate``.
_KEYFRAME_GESTURES = ("whileInView", "whileHover")


class PatternConfig(BaseModel):
  """
  Animation props of a pattern, keyed by framer-motion names.
  """

  initial: Optional[Dict[str, Any]] = None
  animate: Optional[Dict[str, Any]] = None
  exit: Optional[Dict[str, Any]] = None
  transition: Optional[Dict[str, Any]] = None
  variants: Optional[Dict[str, Dict[str, Any]]] = None
  gestures: Dict[str, Any] = Field(default_factory=dict, description="Gesture and drag props, in render order.")


class PatternUsage(BaseModel):
  props: List[str] = Field(default_factory=list)
  dependencies: List[str] = Field(default_factory=list, description="Extra library exports the pattern relies on.")
  notes: List[str] = Field(default_factory=list)


class AnimationPattern(BaseModel):
  """
  A named animation recipe.
  """

  id: str
  name: str
  description: str = ""
  category: PatternCategory
  complexity: Complexity = Complexity.BASIC
  frameworks: List[Framework]
  tags: List[str] = Field(default_factory=list)
  config: PatternConfig = Field(default_factory=PatternConfig)
  usage: PatternUsage = Field(default_factory=PatternUsage)

  def supports(self, framework: Framework) -> bool:
    return framework in self.frameworks


class PatternScore(BaseModel):
  """
  Rough performance rating of a pattern (0-100, higher is cheaper to animate).
  """

  score: int
  factors: Dict[str, int]
  recommendations: List[str] = Field(default_factory=list)


def load_patterns(directory: Optional[Path] = None) -> List[AnimationPattern]:
  """
  Reads the pattern catalogue.

  Args:
      directory (Optional[Path]): Directory holding ``patterns.json``.
          Defaults to the packaged templates.

  Returns:
      List[AnimationPattern]: Patterns in catalogue order.
  """
  directory = directory or resolve_templates_dir()
  with open(directory / PATTERNS_FILE, "rt", encoding="utf-8") as f:
    entries: List[Dict[str, Any]] = json.load(f)
  patterns = [AnimationPattern.model_validate(entry) for entry in entries]
  logger.debug(f"Loaded {len(patterns)} animation patterns from {directory}")
  return patterns


def motion_props(pattern: AnimationPattern, framework: Any = Framework.REACT) -> Dict[str, Any]:
  """
  Flattens a pattern into scaffold props for one framework.

  Component frameworks receive every prop. Vanilla JS plays a single
  ``animate`` call, so it receives the keyframes the element ends on plus the
  transition options.

  Args:
      pattern (AnimationPattern): The pattern.
      framework (Any): Target framework.

  Returns:
      Dict[str, Any]: Props for `scaffold_component`.
  """
  config = pattern.config
  if Framework.resolve(framework) == Framework.JS:
    props: Dict[str, Any] = {}
    if config.initial:
      props["initial"] = config.initial
    keyframes = _keyframes(config)
    if keyframes is not None:
      props["animate"] = keyframes
    if config.transition:
      props["transition"] = config.transition
    return props

  props = {}
  for key in ("initial", "animate", "exit", "variants", "transition"):
    value = getattr(config, key)
    if value:
      props[key] = value
  props.update(config.gestures)
  return props


def _keyframes(config: PatternConfig) -> Optional[Dict[str, Any]]:
  if config.animate:
    return config.animate
  if config.exit:
    return config.exit
  for gesture in _KEYFRAME_GESTURES:
    if isinstance(config.gestures.get(gesture), dict):
      return config.gestures[gesture]
  if config.variants:
    final = list(config.variants.values())[-1]
    return {k: v for k, v in final.items() if k != "transition"}
  return None


def merge_pattern_configs(configs: Sequence[PatternConfig]) -> Dict[str, Any]:
  """
  Combines several patterns into one set of props.

  ``initial`` and ``animate`` targets are merged in order (later patterns win
  on shared keys). A transition replaces the running one when its duration
  is longer.

  Args:
      configs (Sequence[PatternConfig]): Configurations to combine.

  Returns:
      Dict[str, Any]: ``initial`` and ``animate`` (when non-empty) and
      ``transition``.
  """
  initial: Dict[str, Any] = {}
  animate: Dict[str, Any] = {}
  transition = dict(DEFAULT_TRANSITION)
  for config in configs:
    initial.update(config.initial or {})
    animate.update(config.animate or {})
    duration = (config.transition or {}).get("duration")
    if isinstance(duration, (int, float)) and duration > transition["duration"]:
      transition.update(config.transition)

  merged: Dict[str, Any] = {}
  if initial:
    merged["initial"] = initial
  if animate:
    merged["animate"] = animate
  merged["transition"] = transition
  return merged


class PatternLibrary:
  """
  Read-only collection of animation patterns keyed by id.
  """

  def __init__(self, patterns: Optional[List[AnimationPattern]] = None):
    self._patterns: Dict[str, AnimationPattern] = {}
    for pattern in patterns if patterns is not None else load_patterns():
      self._patterns[pattern.id] = pattern

  def __len__(self) -> int:
    return len(self._patterns)

  def __contains__(self, pattern_id: object) -> bool:
    return pattern_id in self._patterns

  def get_pattern(self, pattern_id: str) -> AnimationPattern:
    """
    Raises:
        PatternNotFoundError: If the id is unknown.
    """
    pattern = self._patterns.get(pattern_id)
    if pattern is None:
      raise PatternNotFoundError(pattern_id)
    return pattern

  def all_patterns(self) -> List[AnimationPattern]:
    return list(self._patterns.values())

  def patterns_by_category(self, category: Any) -> List[AnimationPattern]:
    cat = PatternCategory(category)
    return [p for p in self._patterns.values() if p.category == cat]

  def patterns_by_framework(self, framework: Any) -> List[AnimationPattern]:
    fw = Framework.resolve(framework)
    return [p for p in self._patterns.values() if p.supports(fw)]

  def patterns_by_complexity(self, complexity: Any) -> List[AnimationPattern]:
    level = Complexity(complexity)
    return [p for p in self._patterns.values() if p.complexity == level]

  def filter_patterns(
    self,
    category: Any = None,
    framework: Any = None,
    complexity: Any = None,
  ) -> List[AnimationPattern]:
    """
    Lists patterns matching every given criterion; None matches anything.
    """
    results = self.all_patterns()
    if category is not None:
      cat = PatternCategory(category)
      results = [p for p in results if p.category == cat]
    if framework is not None:
      fw = Framework.resolve(framework)
      results = [p for p in results if p.supports(fw)]
    if complexity is not None:
      level = Complexity(complexity)
      results = [p for p in results if p.complexity == level]
    return results

  def search_patterns(self, query: str) -> List[AnimationPattern]:
    """
    Case-insensitive substring search over name, description and tags.

    Args:
        query (str): Search term.

    Returns:
        List[AnimationPattern]: Matches in catalogue order.
    """
    term = query.lower()
    return [
      p
      for p in self._patterns.values()
      if term in p.name.lower() or term in p.description.lower() or any(term in tag.lower() for tag in p.tags)
    ]

  def similar_patterns(self, pattern_id: str, limit: int = 3) -> List[AnimationPattern]:
    """
    Patterns sharing the category or a tag with `pattern_id`.

    Returns:
        List[AnimationPattern]: At most `limit` patterns, catalogue order;
        empty when the id is unknown.
    """
    pattern = self._patterns.get(pattern_id)
    if pattern is None:
      return []
    similar = [
      p
      for p in self._patterns.values()
      if p.id != pattern_id and (p.category == pattern.category or set(p.tags) & set(pattern.tags))
    ]
    return similar[:limit]

  def performance_score(self, pattern_id: str) -> PatternScore:
    """
    Scores a pattern by the properties it animates.

    Transform properties are cheap, layout properties (width/height) cost 30
    points and advanced patterns 10 more.

    Raises:
        PatternNotFoundError: If the id is unknown.
    """
    pattern = self.get_pattern(pattern_id)
    config = json.dumps(pattern.config.model_dump(exclude_none=True))
    factors = {"transforms": 0, "layout": 0, "complexity": 0}
    recommendations: List[str] = []
    score = 100

    if any(f'"{prop}":' in config for prop in ("x", "y", "scale")):
      factors["transforms"] = 20
    if '"width":' in config or '"height":' in config:
      factors["layout"] = -30
      score -= 30
      recommendations.append("Consider using transform properties instead of width/height")
    if pattern.complexity == Complexity.ADVANCED:
      factors["complexity"] = -10
      score -= 10

    return PatternScore(score=max(0, min(100, score)), factors=factors, recommendations=recommendations)

  def pattern_code(
    self,
    pattern_ids: Union[str, Sequence[str]],
    framework: Any,
    component_name: str = DEFAULT_COMPONENT_NAME,
    typescript: bool = False,
    children: Optional[str] = None,
  ) -> str:
    """
    Renders one pattern, or a combination of patterns, as a component.

    Args:
        pattern_ids (Union[str, Sequence[str]]): One id or several to merge.
        framework (Any): Target framework.
        component_name (str): Component identifier.
        typescript (bool): Emit TypeScript.
        children (Optional[str]): Element content.

    Returns:
        str: Component source.

    Raises:
        PatternNotFoundError: If an id is unknown.
        UnsupportedFrameworkError: If the framework is unknown or a pattern
            does not support it.
    """
    fw = Framework.resolve(framework)
    ids = [pattern_ids] if isinstance(pattern_ids, str) else list(pattern_ids)
    if not ids:
      raise PatternNotFoundError("")
    patterns = [self.get_pattern(pattern_id) for pattern_id in ids]
    for pattern in patterns:
      if not pattern.supports(fw):
        raise UnsupportedFrameworkError(fw.value, [f.value for f in pattern.frameworks])

    if len(patterns) == 1:
      props = motion_props(patterns[0], fw)
    else:
      props = merge_pattern_configs([p.config for p in patterns])
    logger.debug(f"Rendering pattern(s) {ids} for {fw.value}")
    return scaffold_component(fw, component_name, props, children, typescript)

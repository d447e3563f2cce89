from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import List, Optional, Protocol, Tuple, Union, runtime_checkable

from .errors import InvalidConfiguration
from .types import DaudStrategy, FastingStatus, FastingType, GeoCoordinate, Madhab

logger = logging.getLogger(__name__)

ADJUSTMENT_LIMIT = 30
STRICT_ADJUSTMENT_LIMIT = 2


def clamp_adjustment(adjustment: int) -> int:
    return max(-ADJUSTMENT_LIMIT, min(ADJUSTMENT_LIMIT, int(adjustment)))


@runtime_checkable
class CustomFastingRule(Protocol):
    def evaluate(
        self, d: date, hijri_year: int, hijri_month: int, hijri_day: int
    ) -> Optional[Tuple[FastingStatus, FastingType]]: ...


class MoonProvider(Protocol):
    """Supplies the moon-sighting day offset for a (date, optional coordinate) pair."""
    def get_adjustment(self, d: date, coords: Optional[GeoCoordinate] = None) -> int: ...


@dataclass(frozen=True)
class FixedAdjustment:
    offset: int = 0

    def __post_init__(self):
        object.__setattr__(self, "offset", clamp_adjustment(self.offset))

    def get_adjustment(self, d: date, coords: Optional[GeoCoordinate] = None) -> int:
        return self.offset


@dataclass(frozen=True)
class NoAdjustment:
    def get_adjustment(self, d: date, coords: Optional[GeoCoordinate] = None) -> int:
        return 0


@dataclass(frozen=True)
class RuleContext:
    """
    Rule engine configuration (immutable).

    Attributes:
        adjustment: Hijri day offset, always clamped to [-30, 30]
        madhab: school of jurisprudence (same Makruh weekday rule for all four)
        daud_strategy: Skip or Postpone when a Daud turn lands on a Haram day
        strict: raise DateOutOfRange instead of clamping unsupported dates
        custom_rules: extra rules folded with max() after the built-in stages
    """
    adjustment: int = 0
    madhab: Madhab = Madhab.SHAFI
    daud_strategy: DaudStrategy = DaudStrategy.SKIP
    strict: bool = False
    custom_rules: Tuple[CustomFastingRule, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "adjustment", clamp_adjustment(self.adjustment))
        object.__setattr__(self, "custom_rules", tuple(self.custom_rules))

    def with_adjustment(self, adjustment: int) -> "RuleContext":
        return replace(self, adjustment=adjustment)

    def with_strategy(self, strategy: DaudStrategy) -> "RuleContext":
        return replace(self, daud_strategy=strategy)

    def with_rule(self, rule: CustomFastingRule) -> "RuleContext":
        return replace(self, custom_rules=self.custom_rules + (rule,))

    @classmethod
    def builder(cls) -> "RuleContextBuilder":
        return RuleContextBuilder()


def _parse_enum(enum_cls, value, what: str):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if value.lower() in (member.value.lower(), member.name.lower()):
                return member
    raise InvalidConfiguration(f"Unknown {what} '{value}'. Available: {[m.value for m in enum_cls]}")


class RuleContextBuilder:
    """
    Collects settings and validates them all in build().

    Validated fields:
        adjustment: int (bool rejected); within [-2, 2] when strict_adjustment
        madhab: Madhab or its name
        daud_strategy: DaudStrategy or its name
        custom rules: objects exposing evaluate(...)
    """

    def __init__(self):
        self._adjustment: object = 0
        self._madhab: object = Madhab.SHAFI
        self._strategy: object = DaudStrategy.SKIP
        self._strict = False
        self._strict_adjustment = False
        self._rules: List[object] = []

    def adjustment(self, adjustment: int) -> "RuleContextBuilder":
        self._adjustment = adjustment
        return self

    def moon_provider(
        self,
        provider: MoonProvider,
        reference_date: date,
        coords: Optional[GeoCoordinate] = None,
    ) -> "RuleContextBuilder":
        self._adjustment = provider.get_adjustment(reference_date, coords)
        logger.debug(f"Moon provider {type(provider).__name__} gave adjustment {self._adjustment}")
        return self

    def madhab(self, madhab: Union[Madhab, str]) -> "RuleContextBuilder":
        self._madhab = madhab
        return self

    def daud_strategy(self, strategy: Union[DaudStrategy, str]) -> "RuleContextBuilder":
        self._strategy = strategy
        return self

    def strict(self, strict: bool = True) -> "RuleContextBuilder":
        self._strict = bool(strict)
        return self

    def strict_adjustment(self, strict: bool = True) -> "RuleContextBuilder":
        self._strict_adjustment = bool(strict)
        return self

    def add_custom_rule(self, rule: CustomFastingRule) -> "RuleContextBuilder":
        self._rules.append(rule)
        return self

    def build(self) -> RuleContext:
        adj = self._adjustment
        if isinstance(adj, bool) or not isinstance(adj, int):
            raise InvalidConfiguration(f"Adjustment must be an integer, got {adj!r}")
        if self._strict_adjustment and not -STRICT_ADJUSTMENT_LIMIT <= adj <= STRICT_ADJUSTMENT_LIMIT:
            raise InvalidConfiguration(
                f"Adjustment {adj} outside strict bounds [-{STRICT_ADJUSTMENT_LIMIT}, {STRICT_ADJUSTMENT_LIMIT}]"
            )
        madhab = _parse_enum(Madhab, self._madhab, "madhab")
        strategy = _parse_enum(DaudStrategy, self._strategy, "Daud strategy")
        for rule in self._rules:
            if not callable(getattr(rule, "evaluate", None)):
                raise InvalidConfiguration(f"Custom rule {rule!r} has no evaluate() method")

        return RuleContext(
            adjustment=adj,
            madhab=madhab,
            daud_strategy=strategy,
            strict=self._strict,
            custom_rules=tuple(self._rules),
        )

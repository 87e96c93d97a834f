"""Resolution of a lot's stored pricing rules into fully populated records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .const import (
    DEFAULT_ADDITIONAL_BLOCK_PRICE,
    DEFAULT_FIRST_BLOCK_DURATION,
    DEFAULT_FIRST_BLOCK_PRICE,
    HOURLY_ADDITIONAL_BLOCK_DURATION,
    MINUTE_ADDITIONAL_BLOCK_DURATION,
    RULE_TYPE_SPECIAL,
    RULE_TYPE_STANDARD,
)
from .models import PricingStrategy, SpecialRule, StandardRule
from .util import coerce_positive_number

_ADDITIONAL_BLOCK_DURATIONS = {
    PricingStrategy.MINUTE_BLOCKS: MINUTE_ADDITIONAL_BLOCK_DURATION,
}


def default_additional_block_duration(strategy: PricingStrategy) -> float:
    return float(_ADDITIONAL_BLOCK_DURATIONS.get(strategy, HOURLY_ADDITIONAL_BLOCK_DURATION))


class PricingRules:
    """Typed view over the heterogeneous ``pricing_rules`` list of a lot.

    Anything other than a list or tuple counts as an empty collection and
    entries that are not mappings are skipped. The first rule of each type
    wins. The wrapped records are never modified.
    """

    def __init__(self, rules: Any) -> None:
        if isinstance(rules, list | tuple):
            self._rules: tuple[Mapping[str, Any], ...] = tuple(
                rule for rule in rules if isinstance(rule, Mapping)
            )
        else:
            self._rules = ()

    def __len__(self) -> int:
        return len(self._rules)

    def find(self, rule_type: str) -> Mapping[str, Any]:
        for rule in self._rules:
            if rule.get("type") == rule_type:
                return rule
        return {}

    def standard_rule(
        self,
        strategy: PricingStrategy = PricingStrategy.HOURLY_BLOCKS,
    ) -> StandardRule:
        rule = self.find(RULE_TYPE_STANDARD)
        return StandardRule(
            first_block_duration=coerce_positive_number(
                rule.get("first_block_duration"),
                float(DEFAULT_FIRST_BLOCK_DURATION),
            ),
            first_block_price=coerce_positive_number(
                rule.get("first_block_price"),
                DEFAULT_FIRST_BLOCK_PRICE,
            ),
            additional_block_duration=coerce_positive_number(
                rule.get("additional_block_duration"),
                default_additional_block_duration(strategy),
            ),
            additional_block_price=coerce_positive_number(
                rule.get("additional_block_price"),
                DEFAULT_ADDITIONAL_BLOCK_PRICE,
            ),
            max_daily_price=coerce_positive_number(rule.get("max_daily_price"), None),
        )

    def special_rule(self) -> SpecialRule:
        rule = self.find(RULE_TYPE_SPECIAL)
        return SpecialRule(
            resident_discount=_discount_fraction(rule.get("resident_discount")),
            disabled_discount=_discount_fraction(rule.get("disabled_discount")),
        )


def _discount_fraction(value: Any) -> float:
    fraction = coerce_positive_number(value, 0.0)
    return min(fraction, 1.0)


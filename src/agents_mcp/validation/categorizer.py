"""ParameterCategorizer: buckets missing parameters using a :class:`RuleSet`.

Pure logic, no I/O. For each missing parameter the engine checks, in order:

1. ``resolvable``: the rule is a resolvable rule and the context supplies
   at least one of its alternate identifying fields.
2. ``can_infer``: the rule marks the parameter as inferable at execution time.
3. ``must_ask_user``: everything else.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from agents_mcp.validation.models import Categorization, CategorizationRule, ParamCategory, RuleSet


def has_value(value: Any) -> bool:
    """Whether *value* counts as supplied (not ``None`` and not ``""``)."""
    return value is not None and value != ""


class ParameterCategorizer:
    """Partition missing parameters against a :class:`RuleSet`."""

    def __init__(self, rules: RuleSet) -> None:
        self._rules = rules

    @property
    def rules(self) -> RuleSet:
        return self._rules

    def classify(self, param: str, context: Mapping[str, Any]) -> ParamCategory:
        """Return the bucket for a single missing parameter."""
        rule = self._rules.get(param)
        if rule is None:
            return ParamCategory.MUST_ASK_USER
        if rule.category is ParamCategory.RESOLVABLE and self._context_supplies(rule, context):
            return ParamCategory.RESOLVABLE
        if rule.category is ParamCategory.CAN_INFER:
            return ParamCategory.CAN_INFER
        return ParamCategory.MUST_ASK_USER

    def categorize(self, missing_params: Iterable[str], context: Mapping[str, Any]) -> Categorization:
        """Partition *missing_params*; each bucket keeps the input order."""
        buckets: dict[ParamCategory, list[str]] = {category: [] for category in ParamCategory}
        seen: set[str] = set()
        for param in missing_params:
            if param in seen:
                continue
            seen.add(param)
            buckets[self.classify(param, context)].append(param)

        return Categorization(
            resolvable=buckets[ParamCategory.RESOLVABLE],
            must_ask_user=buckets[ParamCategory.MUST_ASK_USER],
            can_infer=buckets[ParamCategory.CAN_INFER],
        )

    @staticmethod
    def _context_supplies(rule: CategorizationRule, context: Mapping[str, Any]) -> bool:
        return any(has_value(context.get(field)) for field in rule.context_fields)

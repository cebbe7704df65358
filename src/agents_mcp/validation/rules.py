"""Categorization rule tables and their YAML loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from agents_mcp.config import ConfigError
from agents_mcp.validation.models import CategorizationRule, ParamCategory, RuleSet


def _resolvable(*fields: str) -> CategorizationRule:
    return CategorizationRule(category=ParamCategory.RESOLVABLE, context_fields=list(fields))


_INFER = CategorizationRule(category=ParamCategory.CAN_INFER)

DEFAULT_RULES = RuleSet(
    rules={
        "facilityId": _resolvable("facilityCode", "shortCode", "facilityName"),
        "shipment_id": _resolvable("shipmentId", "license_plate", "contractId"),
        "contractId": _resolvable("contract_reference_id", "contractReference"),
        "detection_time": _INFER,
        "entry_timestamp": _INFER,
        "exit_timestamp": _INFER,
    }
)


def load_rules(path: Path | str | None, *, extend_defaults: bool = False) -> RuleSet:
    """Load a rule set from YAML.

    The file is a mapping with a ``rules`` key::

        rules:
          facilityId:
            category: resolvable
            context_fields: [facilityCode, shortCode]
          detection_time:
            category: can_infer

    ``None`` returns :data:`DEFAULT_RULES`. With *extend_defaults*, file rules
    are layered over the defaults instead of replacing them.

    Raises:
        ConfigError: On read, YAML or schema errors.
    """
    if path is None:
        return DEFAULT_RULES

    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {file_path}: {exc}") from exc

    try:
        data: Any = yaml.safe_load(os.path.expandvars(raw))
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML parse error in {file_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Rules file {file_path} must be a mapping")

    try:
        rules = RuleSet.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    return DEFAULT_RULES.extended(rules) if extend_defaults else rules

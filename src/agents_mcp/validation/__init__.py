"""Pre-flight parameter validation and missing-parameter categorization."""

from agents_mcp.validation.categorizer import ParameterCategorizer
from agents_mcp.validation.models import (
    Categorization,
    CategorizationRule,
    InvalidParam,
    ParamCategory,
    RuleSet,
    ValidationReport,
)
from agents_mcp.validation.rules import DEFAULT_RULES, load_rules
from agents_mcp.validation.validator import NoopTypeValidator, ParameterValidator, TypeValidator

__all__ = [
    "DEFAULT_RULES",
    "Categorization",
    "CategorizationRule",
    "InvalidParam",
    "NoopTypeValidator",
    "ParamCategory",
    "ParameterCategorizer",
    "ParameterValidator",
    "RuleSet",
    "TypeValidator",
    "ValidationReport",
    "load_rules",
]

"""Data models for parameter categorization and ``tools/validate`` reports."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class ParamCategory(str, Enum):
    """How a missing required parameter can be obtained."""

    RESOLVABLE = "resolvable"
    MUST_ASK_USER = "must_ask_user"
    CAN_INFER = "can_infer"


class CategorizationRule(BaseModel):
    """Rule for one parameter name."""

    category: ParamCategory = Field(..., description="Bucket the parameter falls into.")
    context_fields: list[str] = Field(
        default_factory=list,
        description="Context keys any one of which lets the tool resolve the parameter.",
    )

    @model_validator(mode="after")
    def _resolvable_needs_fields(self) -> CategorizationRule:
        if self.category is ParamCategory.RESOLVABLE and not self.context_fields:
            msg = "A 'resolvable' rule must list at least one context field"
            raise ValueError(msg)
        return self


class RuleSet(BaseModel):
    """Mapping of parameter name to :class:`CategorizationRule`."""

    rules: dict[str, CategorizationRule] = Field(default_factory=dict)

    def get(self, param: str) -> CategorizationRule | None:
        return self.rules.get(param)

    def extended(self, other: RuleSet) -> RuleSet:
        """Return a copy where *other*'s rules override this set's."""
        return RuleSet(rules={**self.rules, **other.rules})


class Categorization(BaseModel):
    """Partition of the missing parameters into three disjoint buckets."""

    model_config = {"populate_by_name": True}

    resolvable: list[str] = Field(default_factory=list)
    must_ask_user: list[str] = Field(default_factory=list, alias="mustAskUser")
    can_infer: list[str] = Field(default_factory=list, alias="canInfer")

    def all_params(self) -> list[str]:
        return [*self.resolvable, *self.must_ask_user, *self.can_infer]


class InvalidParam(BaseModel):
    """A provided parameter whose value failed type validation."""

    param: str
    error: str


class ValidationOutcome(BaseModel):
    model_config = {"populate_by_name": True}

    is_valid: bool = Field(..., alias="isValid")
    invalid_params: list[InvalidParam] = Field(default_factory=list, alias="invalidParams")


class ValidationReport(BaseModel):
    """Result of ``tools/validate``; serialized with camelCase keys."""

    model_config = {"populate_by_name": True}

    tool_name: str = Field(..., alias="toolName")
    required_params: list[str] = Field(default_factory=list, alias="requiredParams")
    provided_params: list[str] = Field(default_factory=list, alias="providedParams")
    missing_params: list[str] = Field(default_factory=list, alias="missingParams")
    categorization: Categorization = Field(default_factory=Categorization)
    validation: ValidationOutcome
    confidence: int = Field(..., ge=0, le=100)

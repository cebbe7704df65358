"""ParameterValidator: builds the ``tools/validate`` report for one call."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from agents_mcp.registry.introspector import SchemaIntrospector
from agents_mcp.validation.categorizer import ParameterCategorizer, has_value
from agents_mcp.validation.models import InvalidParam, ValidationOutcome, ValidationReport


@runtime_checkable
class TypeValidator(Protocol):
    """Checks provided argument values against a tool's input schema."""

    def validate(
        self,
        schema: Mapping[str, Any],
        arguments: Mapping[str, Any],
    ) -> list[InvalidParam]: ...


class NoopTypeValidator:
    """Accepts every provided value; only missing parameters invalidate a call."""

    def validate(
        self,
        schema: Mapping[str, Any],
        arguments: Mapping[str, Any],
    ) -> list[InvalidParam]:
        return []


class ParameterValidator:
    """Combine schema introspection, categorization and type checks.

    Usage::

        validator = ParameterValidator(SchemaIntrospector(registry), ParameterCategorizer(rules))
        report = validator.validate("create_facility", {"name": "A"}, context={})
    """

    def __init__(
        self,
        introspector: SchemaIntrospector,
        categorizer: ParameterCategorizer,
        *,
        type_validator: TypeValidator | None = None,
    ) -> None:
        self._introspector = introspector
        self._categorizer = categorizer
        self._type_validator = type_validator or NoopTypeValidator()

    def validate(
        self,
        tool_name: str,
        arguments: Mapping[str, Any],
        context: Mapping[str, Any] | None = None,
    ) -> ValidationReport:
        """Return the report for a prospective call of *tool_name*.

        Raises:
            SchemaIntrospectionError: If the tool's required parameters cannot
                be determined.
        """
        required = self._introspector.required_params(tool_name)
        provided = [key for key, value in arguments.items() if has_value(value)]
        provided_set = set(provided)
        missing = [param for param in required if param not in provided_set]

        categorization = self._categorizer.categorize(missing, context or {})
        invalid = self._type_validator.validate(self._introspector.input_schema(tool_name), arguments)

        is_valid = not missing and not invalid
        return ValidationReport(
            tool_name=tool_name,
            required_params=required,
            provided_params=provided,
            missing_params=missing,
            categorization=categorization,
            validation=ValidationOutcome(is_valid=is_valid, invalid_params=invalid),
            confidence=100 if is_valid else 0,
        )

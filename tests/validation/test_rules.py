"""Tests for the rule tables and their YAML loader."""

from pathlib import Path

import pytest

from agents_mcp.config import ConfigError
from agents_mcp.validation.models import ParamCategory
from agents_mcp.validation.rules import DEFAULT_RULES, load_rules


class TestDefaultRules:
    def test_identifier_rules(self) -> None:
        facility = DEFAULT_RULES.rules["facilityId"]
        assert facility.category is ParamCategory.RESOLVABLE
        assert facility.context_fields == ["facilityCode", "shortCode", "facilityName"]
        assert DEFAULT_RULES.rules["shipment_id"].context_fields == [
            "shipmentId",
            "license_plate",
            "contractId",
        ]
        assert DEFAULT_RULES.rules["contractId"].context_fields == [
            "contract_reference_id",
            "contractReference",
        ]

    def test_timestamp_whitelist(self) -> None:
        inferable = {
            name
            for name, rule in DEFAULT_RULES.rules.items()
            if rule.category is ParamCategory.CAN_INFER
        }
        assert inferable == {"detection_time", "entry_timestamp", "exit_timestamp"}


class TestLoadRules:
    def test_none_returns_defaults(self) -> None:
        assert load_rules(None) is DEFAULT_RULES

    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text(
            "rules:\n"
            "  code:\n"
            "    category: resolvable\n"
            "    context_fields: [facilityCode]\n"
            "  arrival_time:\n"
            "    category: can_infer\n",
            encoding="utf-8",
        )
        rules = load_rules(path)
        assert list(rules.rules) == ["code", "arrival_time"]
        assert rules.rules["code"].context_fields == ["facilityCode"]
        assert "facilityId" not in rules.rules

    def test_extend_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("rules:\n  arrival_time:\n    category: can_infer\n", encoding="utf-8")
        rules = load_rules(path, extend_defaults=True)
        assert "facilityId" in rules.rules
        assert rules.rules["arrival_time"].category is ParamCategory.CAN_INFER

    def test_env_var_expansion(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CODE_FIELD", "siteCode")
        path = tmp_path / "rules.yaml"
        path.write_text(
            "rules:\n  code:\n    category: resolvable\n    context_fields: [${CODE_FIELD}]\n",
            encoding="utf-8",
        )
        assert load_rules(path).rules["code"].context_fields == ["siteCode"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_rules(tmp_path / "absent.yaml")

    def test_bad_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("rules: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigError, match="YAML parse error"):
            load_rules(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_rules(path)

    def test_resolvable_without_fields(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yaml"
        path.write_text("rules:\n  code:\n    category: resolvable\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="context field"):
            load_rules(path)

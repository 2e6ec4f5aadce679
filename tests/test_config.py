"""Tests for application settings."""

import json

import pytest
from pydantic import ValidationError
from wasmsloth.bridge import default_generator, generate_slo_from_raw
from wasmsloth.config import Settings, get_settings


@pytest.fixture
def fresh_caches():
    get_settings.cache_clear()
    default_generator.cache_clear()
    yield
    get_settings.cache_clear()
    default_generator.cache_clear()


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.source_label_name == "source"
        assert settings.source_label_value == "wasm-sloth"
        assert settings.plugin_module_name == "plugin.py"
        assert settings.export_name == "generateSLOFromRaw"
        assert settings.slo_period == "30d"

    def test_explicit_values(self):
        assert Settings(slo_period="28d").slo_period == "28d"

    @pytest.mark.parametrize(
        "env_name",
        ["WASMSLOTH_SOURCE_LABEL_VALUE", "SOURCE_LABEL_VALUE", "source_label_value"],
    )
    def test_environment_ignored(self, monkeypatch, env_name):
        monkeypatch.setenv(env_name, "not-wasm-sloth")

        assert Settings().source_label_value == "wasm-sloth"

    def test_frozen(self):
        settings = Settings()

        with pytest.raises(ValidationError):
            settings.slo_period = "7d"

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestSourceLabelFixed:
    """The identifying label does not depend on the process environment."""

    def test_environment_does_not_change_rule_labels(
        self, monkeypatch, fresh_caches, generic_spec
    ):
        monkeypatch.setenv("WASMSLOTH_SOURCE_LABEL_VALUE", "not-wasm-sloth")
        monkeypatch.setenv("SOURCE_LABEL_VALUE", "not-wasm-sloth")

        payload = json.loads(generate_slo_from_raw(generic_spec))

        sources = {
            rule["Labels"].get("source")
            for slo_result in payload["result"]["Result"]["SLOResults"]
            for rules in slo_result["PrometheusRules"].values()
            for rule in rules
        }
        assert sources == {"wasm-sloth"}

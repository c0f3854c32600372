"""
Tests for configuration loading and its effect on introspection.
"""

import logging

from pydantic import BaseModel, Field

from starbind import StarBindConfig, build_manifest, configure_logging, get_config, set_config


class Panel(BaseModel):
    title: str = Field("main", json_schema_extra={"ui": "heading"})

    def expose_toggle(self):
        return True

    def on_toggle(self):
        return False


def test_defaults():
    config = StarBindConfig()

    assert config.binding.tag_key == "bind"
    assert config.binding.export_prefix == "on_"
    assert config.binding.handler_suffix == "_changed"
    assert config.logging.level == "WARNING"


def test_from_dict_ignores_unknown_keys():
    config = StarBindConfig.from_dict({
        "binding": {"export_prefix": "js_", "bogus": 1},
        "logging": {"level": "DEBUG"},
        "other": {"x": 1},
    })

    assert config.binding.export_prefix == "js_"
    assert not hasattr(config.binding, "bogus")
    assert config.logging.level == "DEBUG"
    assert StarBindConfig.from_dict(config.to_dict()) == config


def test_from_environment(monkeypatch):
    monkeypatch.setenv("STARBIND_LOG_LEVEL", "info")
    monkeypatch.setenv("STARBIND_TAG_KEY", "ui")
    monkeypatch.setenv("STARBIND_EXPORT_PREFIX", "expose_")

    config = StarBindConfig.from_environment()

    assert config.logging.level == "INFO"
    assert config.binding.tag_key == "ui"
    assert config.binding.export_prefix == "expose_"


def test_lazy_global_reads_environment(monkeypatch):
    monkeypatch.setenv("STARBIND_TAG_KEY", "ui")
    set_config(None)

    assert get_config().binding.tag_key == "ui"


def test_conventions_drive_introspection():
    set_config(StarBindConfig.from_dict({"binding": {"tag_key": "ui", "export_prefix": "expose_"}}))

    manifest = build_manifest(Panel())

    assert list(manifest.fields) == ["title"]
    assert manifest.fields["title"].alias == "heading"
    assert list(manifest.exported_methods) == ["expose_toggle"]


def test_configure_logging_sets_level():
    config = StarBindConfig.from_dict({"logging": {"level": "DEBUG"}})

    logger = configure_logging(config)

    assert logger is logging.getLogger("starbind")
    assert logger.level == logging.DEBUG
    assert logger.handlers

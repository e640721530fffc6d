from pathlib import Path

import pytest

from ts_gen import NUMBER, Field, StructDef, TypeRegistry, derive, serde
from ts_gen.config import DEFAULT_EXPORT_DIR, ExportConfig, FormatterConfig, default_config, use_config
from ts_gen.errors import ConfigError


class TestExportConfig:
    def test_defaults(self):
        config = ExportConfig()
        assert config.export_dir == DEFAULT_EXPORT_DIR
        assert config.export_path == Path("bindings")
        assert config.serde_compat
        assert not config.no_serde_warnings
        assert not config.import_esm
        assert not config.format
        assert config.formatter.command == ["dprint", "fmt", "--stdin"]

    def test_from_env(self):
        config = ExportConfig.from_env(
            {
                "TS_GEN_EXPORT_DIR": "out/types",
                "TS_GEN_NO_SERDE_WARNINGS": "1",
                "TS_GEN_IMPORT_ESM": "true",
                "TS_GEN_FORMAT": "no",
            }
        )
        assert config.export_dir == "out/types"
        assert config.no_serde_warnings
        assert config.import_esm
        assert not config.format

    def test_from_empty_env(self):
        config = ExportConfig.from_env({"TS_GEN_EXPORT_DIR": ""})
        assert config.export_dir == DEFAULT_EXPORT_DIR

    def test_from_dict(self):
        config = ExportConfig.from_dict(
            {
                "export_dir": "generated",
                "import_esm": True,
                "formatter": {"command": ["dprint", "fmt"], "timeout": 5},
                "unknown": 1,
            }
        )
        assert config.export_dir == "generated"
        assert config.import_esm
        assert config.formatter == FormatterConfig(command=["dprint", "fmt"], timeout=5)
        assert not hasattr(config, "unknown")

    def test_from_dict_on_base(self):
        base = ExportConfig(no_serde_warnings=True)
        config = ExportConfig.from_dict({"format": True}, base=base)
        assert config.no_serde_warnings
        assert config.format

    def test_to_dict(self):
        config = ExportConfig(export_dir="x", format=True)
        assert ExportConfig.from_dict(config.to_dict()) == config

    def test_from_dict_leaves_base_unchanged(self):
        base = ExportConfig(export_dir="base")
        config = ExportConfig.from_dict({"export_dir": "other", "formatter": {"timeout": 1}}, base=base)
        assert config.export_dir == "other"
        assert base.export_dir == "base"
        assert base.formatter == FormatterConfig()

    def test_from_dict_rejects_non_object_formatter(self):
        with pytest.raises(ConfigError):
            ExportConfig.from_dict({"formatter": None})


class TestDefaultConfig:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TS_GEN_EXPORT_DIR", "env_out")
        assert default_config().export_dir == "env_out"

    def test_use_config(self, monkeypatch):
        monkeypatch.setenv("TS_GEN_EXPORT_DIR", "env_out")
        config = ExportConfig(export_dir="active", serde_compat=False)
        with use_config(config):
            assert default_config() is config
        assert default_config().export_dir == "env_out"

    def test_derive_uses_active_config(self):
        definition = StructDef("S", [Field("user_id", NUMBER)], attrs=[serde(rename_all="camelCase")])
        with use_config(ExportConfig(serde_compat=False)):
            ty = derive(definition, registry=TypeRegistry())
        assert ty.inline() == "{ user_id: number }"

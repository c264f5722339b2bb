"""Unit tests for project configuration (copyown.config).

Tests cover:
- Config defaults and immutability
- from_dict / to_dict with the microbuild.json shape
- load_config (use tmp_path), including error cases
- alias_segments / resolve_alias
"""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from copyown.config import (
    Aliases,
    Config,
    ConfigError,
    alias_segments,
    load_config,
    resolve_alias,
)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.model == "copy-own"
        assert config.tsx is True
        assert config.src_dir is False
        assert config.aliases == Aliases("@/components/ui", "@/lib/microbuild")
        assert config.installed_lib == ()
        assert config.scope == "@microbuild"
        assert config.namespace == "microbuild"

    def test_is_frozen(self):
        config = Config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.tsx = False  # type: ignore[misc]

    def test_from_dict(self):
        config = Config.from_dict(
            {
                "model": "copy-own",
                "tsx": False,
                "srcDir": True,
                "aliases": {"components": "~/ui", "lib": "~/shared"},
                "installedLib": ["types", "services"],
                "installedComponents": ["input"],
            }
        )
        assert config.tsx is False
        assert config.src_dir is True
        assert config.aliases.components == "~/ui"
        assert config.aliases.lib == "~/shared"
        assert config.installed_lib == ("types", "services")
        assert config.installed_components == ("input",)

    def test_from_dict_fills_missing_keys(self):
        config = Config.from_dict({"aliases": {"lib": "~/shared"}})
        assert config.aliases.components == "@/components/ui"
        assert config.aliases.lib == "~/shared"

    def test_from_dict_rejects_bad_shapes(self):
        with pytest.raises(ConfigError):
            Config.from_dict([])  # type: ignore[arg-type]
        with pytest.raises(ConfigError):
            Config.from_dict({"aliases": "components"})
        with pytest.raises(ConfigError):
            Config.from_dict({"installedLib": "types"})

    def test_to_dict_round_trip(self):
        data = {
            "model": "copy-own",
            "tsx": True,
            "srcDir": False,
            "aliases": {"components": "@/components/ui", "lib": "@/lib/microbuild"},
            "installedLib": ["types"],
            "installedComponents": [],
        }
        assert Config.from_dict(data).to_dict() == data

    def test_with_aliases(self):
        config = Config()
        custom = config.with_aliases(lib="~/shared")
        assert custom.aliases.lib == "~/shared"
        assert custom.aliases.components == config.aliases.components
        assert config.aliases.lib == "@/lib/microbuild"


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_load_from_file(self, tmp_path: Path):
        path = tmp_path / "microbuild.json"
        path.write_text(json.dumps({"srcDir": True, "aliases": {"components": "@/ui"}}))
        config = load_config(path)
        assert config.src_dir is True
        assert config.aliases.components == "@/ui"

    def test_load_from_directory(self, tmp_path: Path):
        (tmp_path / "microbuild.json").write_text("{}")
        assert load_config(tmp_path) == Config()

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "microbuild.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_config(path)


# ---------------------------------------------------------------------------
# Aliases
# ---------------------------------------------------------------------------


class TestAliasHelpers:
    @pytest.mark.parametrize(
        "alias, expected",
        [
            ("@/components/ui", ["components", "ui"]),
            ("~/lib/microbuild", ["lib", "microbuild"]),
            ("@components/ui", ["components", "ui"]),
            ("components/ui", ["components", "ui"]),
        ],
    )
    def test_alias_segments(self, alias, expected):
        assert alias_segments(alias) == expected

    def test_resolve_alias(self, tmp_path: Path):
        assert resolve_alias("@/components/ui", tmp_path) == tmp_path / "components" / "ui"
        assert resolve_alias("@/components/ui", tmp_path, src_dir=True) == tmp_path / "src" / "components" / "ui"

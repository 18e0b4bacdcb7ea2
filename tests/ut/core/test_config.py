"""Config 加载 / 环境变量覆盖 / 键值查询测试"""

from __future__ import annotations

from pathlib import Path

import pytest

import nuget_installer.core.config as cfgmod
from nuget_installer.core.config import NUGET_CONFIG_FILE, NUGET_SOURCE, Config
from nuget_installer.core.exceptions import ConfigError


class TestFromFile:
    def test_missing_file_defaults(self, tmp_path: Path) -> None:
        cfg = Config.from_file(str(tmp_path / "none.yml"))
        assert cfg == Config()

    def test_known_and_extra(self, tmp_path: Path) -> None:
        p = tmp_path / "c.yml"
        p.write_text(
            "nuget_source: https://feed/\n"
            "install_timeout: 30\n"
            "team: build\n",
            encoding="utf-8",
        )
        cfg = Config.from_file(str(p))
        assert cfg.nuget_source == "https://feed/"
        assert cfg.install_timeout == 30
        assert cfg.extra == {"team": "build"}

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        p = tmp_path / "bad.yml"
        p.write_text("a: [1, 2\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="YAML"):
            Config.from_file(str(p))

    def test_non_dict_top_level(self, tmp_path: Path) -> None:
        p = tmp_path / "list.yml"
        p.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="字典"):
            Config.from_file(str(p))

    def test_negative_timeout(self, tmp_path: Path) -> None:
        p = tmp_path / "c.yml"
        p.write_text("install_timeout: -1\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="install_timeout"):
            Config.from_file(str(p))


class TestApplyEnv:
    def test_overrides(self) -> None:
        cfg = Config(nuget_source="file").apply_env({
            "NUGET_INSTALLER_NUGET_SOURCE": "https://env/",
            "NUGET_INSTALLER_INSTALL_TIMEOUT": "5",
        })
        assert cfg.nuget_source == "https://env/"
        assert cfg.install_timeout == 5

    def test_bad_timeout(self) -> None:
        with pytest.raises(ConfigError, match="不是整数"):
            Config().apply_env({"NUGET_INSTALLER_INSTALL_TIMEOUT": "soon"})

    def test_unrelated_env_ignored(self) -> None:
        cfg = Config().apply_env({"NUGET_SOURCE": "https://x/"})
        assert cfg.nuget_source == ""


class TestGetValue:
    def test_known_keys(self) -> None:
        cfg = Config(nuget_source="https://s/", nuget_config_file="/n.config")
        assert cfg.get_value(NUGET_SOURCE) == "https://s/"
        assert cfg.get_value(NUGET_CONFIG_FILE) == "/n.config"

    def test_case_insensitive_key(self) -> None:
        assert Config(nuget_source="https://s/").get_value("NuGet_Source") == "https://s/"

    @pytest.mark.parametrize("blank", ["", "  "])
    def test_blank_is_none(self, blank: str) -> None:
        assert Config(nuget_source=blank).get_value(NUGET_SOURCE) is None

    def test_extra_and_missing(self) -> None:
        cfg = Config(extra={"team": "build"})
        assert cfg.get_value("team") == "build"
        assert cfg.get_value("nope") is None


class TestGlobalConfig:
    def test_init_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cfgmod, "_current", None)
        p = tmp_path / "c.yml"
        p.write_text("target_framework: net6.0\n", encoding="utf-8")
        cfg = cfgmod.init_config(str(p))
        assert cfgmod.get_config() is cfg
        assert cfg.target_framework == "net6.0"

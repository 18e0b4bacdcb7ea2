"""nuget install 参数构造测试"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from nuget_installer.core.config import NUGET_CONFIG_FILE, NUGET_SOURCE, Config
from nuget_installer.core.package.arguments import (
    ProcessArgumentBuilder,
    build_install_arguments,
)
from nuget_installer.core.package.models import PackageReference

ROOT = Path("/work/tools/foo.bar")


def _args(uri: str, config: Config | None = None) -> list[str]:
    ref = PackageReference.parse(uri)
    return build_install_arguments(ref, ROOT, config or Config()).to_list()


class TestBuildInstallArguments:
    def test_minimal(self) -> None:
        assert _args("nuget:?package=Foo.Bar") == [
            "install", "Foo.Bar",
            "-OutputDirectory", str(ROOT),
            "-ExcludeVersion", "-NonInteractive",
        ]

    def test_full_order(self) -> None:
        cfg = Config(nuget_source="https://cfg/", nuget_config_file="/etc/nuget.config")
        args = _args(
            "nuget:https://feed.example/v3/?package=Foo.Bar&nocache&prerelease&version=2.3.0",
            cfg,
        )
        assert args == [
            "install", "Foo.Bar",
            "-OutputDirectory", str(ROOT),
            "-Source", "https://feed.example/v3/",
            "-ConfigFile", "/etc/nuget.config",
            "-Version", "2.3.0",
            "-Prerelease",
            "-NoCache",
            "-ExcludeVersion", "-NonInteractive",
        ]

    def test_address_skips_config_source_lookup(self) -> None:
        config = MagicMock()
        config.get_value.return_value = None
        ref = PackageReference.parse("nuget:https://feed.example/?package=Foo")
        args = build_install_arguments(ref, ROOT, config).to_list()
        assert args[args.index("-Source") + 1] == "https://feed.example/"
        looked_up = [c.args[0] for c in config.get_value.call_args_list]
        assert NUGET_SOURCE not in looked_up
        assert NUGET_CONFIG_FILE in looked_up

    def test_config_source_used_without_address(self) -> None:
        args = _args("nuget:?package=Foo", Config(nuget_source="https://cfg/"))
        assert args[args.index("-Source") + 1] == "https://cfg/"

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_config_values_omitted(self, blank: str) -> None:
        args = _args("nuget:?package=Foo", Config(nuget_source=blank, nuget_config_file=blank))
        assert "-Source" not in args
        assert "-ConfigFile" not in args

    @pytest.mark.parametrize("flag,token", [("prerelease", "-Prerelease"), ("nocache", "-NoCache")])
    def test_flags_have_no_value(self, flag: str, token: str) -> None:
        args = _args(f"nuget:?package=Foo&{flag}")
        i = args.index(token)
        assert args[i + 1].startswith("-")

    def test_version_immediately_follows(self) -> None:
        args = _args("nuget:?package=Foo&version=2.3.0")
        i = args.index("-Version")
        assert args[i + 1] == "2.3.0"

    def test_version_build_metadata_kept(self) -> None:
        args = _args("nuget:?package=Foo&version=1.0.0+build.5")
        assert args[args.index("-Version") + 1] == "1.0.0+build.5"

    def test_bare_host_address_normalized(self) -> None:
        args = _args("nuget:https://feed.example?package=Foo")
        assert args[args.index("-Source") + 1] == "https://feed.example/"

    def test_version_passed_verbatim(self) -> None:
        args = _args("nuget:?package=Foo&version=not a version")
        assert args[args.index("-Version") + 1] == "not a version"

    def test_unknown_parameters_ignored(self) -> None:
        assert _args("nuget:?package=Foo&include=x.exe&channel=beta") == _args("nuget:?package=Foo")


class TestRender:
    def test_quotes_values_with_whitespace(self) -> None:
        ref = PackageReference.parse("nuget:?package=Foo")
        rendered = build_install_arguments(ref, Path("/my tools/foo"), Config()).render()
        assert rendered == (
            'install "Foo" -OutputDirectory "/my tools/foo" -ExcludeVersion -NonInteractive'
        )

    def test_embedded_quote_escaped(self) -> None:
        b = ProcessArgumentBuilder().append("a").append_quoted('b"c')
        assert b.render() == 'a "b\\"c"'
        assert b.to_list() == ["a", 'b"c']
        assert len(b) == 2
        assert list(b) == ["a", 'b"c']

"""包引用数据模型

数据类:
- PackageType: 包用途（插件程序集 / 工具）
- PackageReference: 包引用，不可变

引用语法:
    nuget:?package=Cake.Foo&version=1.2.3&prerelease
    nuget:https://myget.org/F/feed/?package=Cake.Foo

参数值按 URI 百分号编码解码，"+" 保持原样（1.0.0+build.5 不会变成空格）。
源地址规范化为绝对 URI: scheme 与主机名小写，空路径补 "/"。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping
from urllib.parse import SplitResult, unquote, urlsplit

from nuget_installer.core.exceptions import ValidationError

NUGET_SCHEME = "nuget"


def _absolute_uri(parts: SplitResult) -> str:
    return parts._replace(
        scheme=parts.scheme.lower(),
        netloc=parts.netloc.lower(),
        path=parts.path or "/",
    ).geturl()


class PackageType(Enum):
    """包用途，决定内容解析策略和告警文案"""

    ADDIN = "addin"
    TOOL = "tool"

    @classmethod
    def parse(cls, text: str) -> PackageType:
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValidationError(
                f"未知包类型: {text!r}，可选: {[t.value for t in cls]}"
            ) from None


@dataclass(frozen=True)
class PackageReference:
    """单个包引用

    parameters 的键统一小写，值为按出现顺序排列的元组。
    """

    scheme: str
    package: str
    address: str | None = None
    parameters: Mapping[str, tuple[str, ...]] = field(default_factory=dict, hash=False)
    original: str = ""

    def __post_init__(self) -> None:
        if not self.scheme:
            raise ValidationError("包引用缺少 scheme")
        if not self.package:
            raise ValidationError("包引用缺少 package")
        normalized: dict[str, tuple[str, ...]] = {}
        for key, values in self.parameters.items():
            if isinstance(values, str):
                values = (values,)
            normalized.setdefault(key.lower(), ())
            normalized[key.lower()] += tuple(values)
        object.__setattr__(self, "parameters", MappingProxyType(normalized))

    @classmethod
    def parse(cls, uri: str) -> PackageReference:
        """解析包引用字符串，格式错误抛 ValidationError"""
        text = uri.strip()
        scheme, sep, rest = text.partition(":")
        if not sep or not scheme:
            raise ValidationError(f"包引用缺少 scheme: {uri!r}")

        address_part, _, query = rest.partition("?")
        address: str | None = None
        if address_part:
            parts = urlsplit(address_part)
            if not parts.scheme or not parts.netloc:
                raise ValidationError(f"包源地址必须是绝对 URI: {address_part!r}")
            address = _absolute_uri(parts)

        parameters: dict[str, tuple[str, ...]] = {}
        for item in filter(None, query.split("&")):
            raw_key, _, raw_value = item.partition("=")
            key, value = unquote(raw_key).lower(), unquote(raw_value)
            parameters[key] = parameters.get(key, ()) + (value,)

        packages = parameters.pop("package", ())
        if not packages or not packages[0]:
            raise ValidationError(f"包引用缺少 package 参数: {uri!r}")

        return cls(
            scheme=scheme,
            package=packages[0],
            address=address,
            parameters=parameters,
            original=text,
        )

    def has_parameter(self, name: str) -> bool:
        return name.lower() in self.parameters

    def get_parameter(self, name: str) -> str | None:
        """返回参数的第一个值，不存在返回 None"""
        values = self.parameters.get(name.lower())
        return values[0] if values else None

    def get_parameters(self, name: str) -> tuple[str, ...]:
        return self.parameters.get(name.lower(), ())

    @property
    def version(self) -> str | None:
        return self.get_parameter("version")

    def __str__(self) -> str:
        return self.original or f"{self.scheme}:?package={self.package}"

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ncu_groups.models import UNRESOLVED, VersionMap

_VERSION_SECTIONS = ("dependencies", "devDependencies")


def merge_version_maps(data: Any) -> VersionMap:
    """
    合并 package.json 形状数据中的 dependencies 与 devDependencies（后者覆盖前者）。
    """
    merged: VersionMap = {}
    if not isinstance(data, dict):
        return merged
    for section in _VERSION_SECTIONS:
        table = data.get(section) or {}
        if not isinstance(table, dict):
            continue
        for name, version in table.items():
            if isinstance(version, str):
                merged[str(name)] = version
    return merged


def format_package_line(name: str, current: str | None, target: str | None) -> str:
    """
    生成 "<包名>: <当前版本> -> <目标版本>"，缺失的版本以 undefined 占位。
    """
    current_text = UNRESOLVED if current is None else current
    target_text = UNRESOLVED if target is None else target
    return f"{name}: {current_text} -> {target_text}"


def annotate(
    components: Iterable[Iterable[str]],
    current_versions: Mapping[str, str] | None,
    target_versions: Mapping[str, str] | None,
) -> list[list[str]] | None:
    """
    为每个分组中的包补充当前与目标版本。

    任一版本来源整体不可读（None）时不产出结果，返回 None。
    """
    if current_versions is None or target_versions is None:
        return None
    return [
        [format_package_line(name, current_versions.get(name), target_versions.get(name)) for name in component]
        for component in components
    ]

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ncu_groups.diagnostics import DiagnosticLog
from ncu_groups.models import DependencyMap, VersionMap
from ncu_groups.versions import merge_version_maps

PACKAGE_JSON_HINT = "确认 package.json 存在并包含 dependencies/devDependencies"
NPM_LIST_COMMAND = "npm ls --depth=1 --json > npmlist.json"
PACKAGE_UPDATES_COMMAND = "npx npm-check-updates --jsonAll > package-updates.json"


def _load_json(path: Path, log: DiagnosticLog, *, hint: str | None) -> Any | None:
    """
    读取 JSON 文件；文件缺失或内容非法都视为不可读，记录错误并返回 None。
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        log.error(f"读取 {path} 失败：{exc}", hint=hint)
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        log.error(f"解析 {path} 失败：{exc}", hint=hint)
        return None


def dependency_map_from_npm_list(data: Any) -> DependencyMap:
    """
    将 `npm ls --depth=1 --json` 的数据转换为 根包 -> 直接依赖名 的映射。
    """
    if not isinstance(data, dict):
        return {}
    roots = data.get("dependencies") or {}
    if not isinstance(roots, dict):
        return {}

    deps: DependencyMap = {}
    for root, info in roots.items():
        inner = info.get("dependencies") if isinstance(info, dict) else None
        deps[str(root)] = tuple(str(n) for n in inner) if isinstance(inner, dict) else ()
    return deps


def read_dependency_map(path: Path, log: DiagnosticLog) -> DependencyMap | None:
    """
    读取 npmlist.json 并返回依赖映射。
    """
    data = _load_json(path, log, hint=NPM_LIST_COMMAND)
    if data is None:
        return None
    return dependency_map_from_npm_list(data)


def read_current_versions(path: Path, log: DiagnosticLog) -> VersionMap | None:
    """
    从 package.json 读取当前版本（dependencies + devDependencies）。
    """
    data = _load_json(path, log, hint=PACKAGE_JSON_HINT)
    if data is None:
        return None
    return merge_version_maps(data)


def read_target_versions(path: Path, log: DiagnosticLog) -> VersionMap | None:
    """
    从 `npm-check-updates --jsonAll` 的输出读取目标版本。
    """
    data = _load_json(path, log, hint=PACKAGE_UPDATES_COMMAND)
    if data is None:
        return None
    return merge_version_maps(data)

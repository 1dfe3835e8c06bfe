from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib

from ncu_groups.models import ReportSection


@dataclass(frozen=True, slots=True)
class InputPaths:
    """
    一次分组运行涉及的输入/输出文件路径。
    """

    report: Path = Path("npm-check-updates")
    npm_list: Path = Path("npmlist.json")
    package_json: Path = Path("package.json")
    updates: Path = Path("package-updates.json")
    output: Path = Path("result.json")

    def relative_to(self, base: Path) -> InputPaths:
        """
        将相对路径解析到 base 目录下（绝对路径保持不变）。
        """
        return InputPaths(
            report=base / self.report,
            npm_list=base / self.npm_list,
            package_json=base / self.package_json,
            updates=base / self.updates,
            output=base / self.output,
        )


@dataclass(frozen=True, slots=True)
class AppConfig:
    """
    ncu-groups 的运行配置（可来自配置文件、环境变量与 CLI 参数合并）。
    """

    paths: InputPaths = InputPaths()
    section: ReportSection = ReportSection.MAJOR
    exclude: tuple[str, ...] = ()


def _find_default_config_file(cwd: Path) -> Path | None:
    """
    在当前目录查找默认配置文件路径。
    """
    candidates = [
        ".ncu-groups.toml",
        ".ncu-groups.yaml",
        ".ncu-groups.yml",
        "ncu-groups.toml",
        "ncu-groups.yaml",
        "ncu-groups.yml",
    ]
    for name in candidates:
        p = cwd / name
        if p.exists() and p.is_file():
            return p
    return None


def _load_yaml(path: Path) -> dict[str, Any]:
    """
    读取 YAML 配置文件（需要 PyYAML）。
    """
    import yaml

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        return {}
    return data


def _load_config_file(path: Path) -> dict[str, Any]:
    """
    读取 .toml 或 .yaml 配置文件，返回配置字典。
    """
    suffix = path.suffix.lower()
    if suffix == ".toml":
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}
    if suffix in {".yaml", ".yml"}:
        return _load_yaml(path)
    return {}


def _env_list(key: str) -> list[str]:
    """
    从环境变量读取列表（逗号分隔）。
    """
    value = os.environ.get(key)
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def parse_section(value: str | None) -> ReportSection:
    """
    将区块名解析为 ReportSection（大小写不敏感），非法值回退为 Major。
    """
    if value:
        for section in ReportSection:
            if section.value.lower() == value.strip().lower():
                return section
    return ReportSection.MAJOR


def load_config(config_path: str | None, *, cwd: Path | None = None) -> AppConfig:
    """
    从配置文件与环境变量加载 AppConfig。

    未指定 config_path 时在 cwd（默认当前工作目录）中查找默认配置文件。
    """
    config_data: dict[str, Any] = {}
    if config_path:
        config_data = _load_config_file(Path(config_path))
    else:
        default = _find_default_config_file(cwd if cwd is not None else Path.cwd())
        if default:
            config_data = _load_config_file(default)

    tool_cfg = config_data.get("ncu_groups") if isinstance(config_data, dict) else {}
    if not isinstance(tool_cfg, dict):
        tool_cfg = {}

    defaults = InputPaths()

    def path_setting(env_key: str, cfg_key: str, default: Path) -> Path:
        raw = os.environ.get(env_key) or str(tool_cfg.get(cfg_key) or "")
        return Path(raw) if raw else default

    paths = InputPaths(
        report=path_setting("NCU_GROUPS_REPORT", "report", defaults.report),
        npm_list=path_setting("NCU_GROUPS_NPM_LIST", "npm_list", defaults.npm_list),
        package_json=path_setting("NCU_GROUPS_PACKAGE_JSON", "package_json", defaults.package_json),
        updates=path_setting("NCU_GROUPS_UPDATES", "updates", defaults.updates),
        output=path_setting("NCU_GROUPS_OUTPUT", "output", defaults.output),
    )

    section = parse_section(os.environ.get("NCU_GROUPS_SECTION") or str(tool_cfg.get("section") or ""))
    exclude = tuple(_env_list("NCU_GROUPS_EXCLUDE") or list(tool_cfg.get("exclude") or []))

    return AppConfig(paths=paths, section=section, exclude=exclude)

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from ncu_groups.config import AppConfig, InputPaths, load_config, parse_section
from ncu_groups.models import ReportSection


def build_parser() -> argparse.ArgumentParser:
    """
    构建 ncu-groups 的命令行参数解析器。
    """
    parser = argparse.ArgumentParser(prog="ncu-groups")
    parser.add_argument(
        "--version",
        action="store_true",
        help="输出版本号并退出",
    )
    parser.add_argument("--config", help="配置文件路径（.toml 或 .yaml；未指定时在 --dir 目录中查找）")
    parser.add_argument("--dir", default=".", help="项目目录，相对路径均基于该目录（默认：当前目录）")
    parser.add_argument("--report", help="npm-check-updates --format group 的输出文件")
    parser.add_argument("--npm-list", help="npm ls --depth=1 --json 的输出文件")
    parser.add_argument("--package-json", help="package.json 路径")
    parser.add_argument("--updates", help="npm-check-updates --jsonAll 的输出文件")
    parser.add_argument("--output", help="结果文件路径（默认：result.json）")
    parser.add_argument(
        "--section",
        choices=[s.value for s in ReportSection],
        help="参与分组的报告区块（默认：Major）",
    )
    parser.add_argument("--exclude", action="append", default=[], help="不参与分组的包名（可重复）")

    subparsers = parser.add_subparsers(dest="command")

    group = subparsers.add_parser("group", help="计算需要一起更新的包分组并写出结果文件")
    group.add_argument("--format", choices=["table", "json", "md"], default="table", help="摘要输出格式")
    group.add_argument("--summary-output", help="将摘要输出到文件（默认 stdout）")

    subparsers.add_parser("sections", help="列出报告中各区块的包")

    return parser


def _merge_cli_overrides(cfg: AppConfig, args: argparse.Namespace) -> AppConfig:
    """
    将 CLI 参数覆盖合并到 AppConfig。
    """
    paths = cfg.paths
    paths = InputPaths(
        report=Path(args.report) if args.report else paths.report,
        npm_list=Path(args.npm_list) if args.npm_list else paths.npm_list,
        package_json=Path(args.package_json) if args.package_json else paths.package_json,
        updates=Path(args.updates) if args.updates else paths.updates,
        output=Path(args.output) if args.output else paths.output,
    )
    section = cfg.section if args.section is None else parse_section(args.section)
    exclude = tuple([*cfg.exclude, *(args.exclude or [])])
    return AppConfig(paths=paths, section=section, exclude=exclude)


def _run_group(cfg: AppConfig, base_dir: Path, args: argparse.Namespace) -> int:
    """
    执行 group 子命令。
    """
    from ncu_groups.app import run_grouping
    from ncu_groups.diagnostics import DiagnosticLog
    from ncu_groups.formatters import print_diagnostics, print_groups, render_json, render_markdown

    log = DiagnosticLog()
    try:
        result = run_grouping(cfg, base_dir=base_dir, log=log)
    except OSError as exc:
        print_diagnostics(log.items)
        print(f"ncu-groups: 写出结果失败：{exc}", file=sys.stderr)
        return 1

    print_diagnostics(result.diagnostics)

    fmt = getattr(args, "format", "table")
    output_path = getattr(args, "summary_output", None)
    if fmt == "table":
        if output_path:
            with open(output_path, "w", encoding="utf-8") as f:
                print_groups(result, file=f)
        else:
            print_groups(result)
        return 0
    if fmt == "json":
        text = render_json(result.groups)
    else:
        text = render_markdown(result)
    if output_path:
        Path(output_path).write_text(text, encoding="utf-8")
    else:
        print(text)
    return 0


def _run_sections(cfg: AppConfig, base_dir: Path) -> int:
    """
    执行 sections 子命令。
    """
    from ncu_groups.diagnostics import DiagnosticLog
    from ncu_groups.formatters import print_diagnostics, print_sections
    from ncu_groups.ncu_report import read_update_report

    log = DiagnosticLog()
    sections = read_update_report(cfg.paths.relative_to(base_dir).report, log)
    print_diagnostics(log.items)
    if sections is None:
        return 1
    print_sections(sections)
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    ncu-groups 命令行入口。
    """
    args = build_parser().parse_args(argv)

    if args.version:
        from ncu_groups import __version__

        print(__version__)
        return 0

    base_dir = Path(args.dir)
    cfg = _merge_cli_overrides(load_config(args.config, cwd=base_dir), args)

    if args.command in (None, "group"):
        return _run_group(cfg, base_dir, args)

    if args.command == "sections":
        return _run_sections(cfg, base_dir)

    print(f"ncu-groups: 未知子命令 {args.command!r}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())

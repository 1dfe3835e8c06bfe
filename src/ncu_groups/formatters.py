from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ncu_groups.diagnostics import Diagnostic, DiagnosticLevel
from ncu_groups.models import ReportSection

if TYPE_CHECKING:
    from ncu_groups.app import GroupingResult


def render_json(groups: list[list[str]]) -> str:
    """
    渲染 JSON 输出（嵌套列表）。
    """
    return json.dumps(groups, ensure_ascii=False, indent=2)


def write_result(path: Path, groups: list[list[str]]) -> None:
    """
    写出结果文件；没有分组时写出空列表。
    """
    path.write_text(render_json(groups) + "\n", encoding="utf-8")


def render_markdown(result: GroupingResult) -> str:
    """
    渲染 Markdown 报告（统计 + 每组一个列表）。
    """
    lines: list[str] = []
    lines.append(
        f"# ncu-groups 报告\n\n- 区块：{result.section.value}\n- 目标包：{len(result.targets)}\n"
        f"- 分组：{len(result.groups)}\n- 结果文件：`{result.output_path}`\n"
    )
    for index, group in enumerate(result.groups, start=1):
        lines.append(f"## 分组 {index}\n")
        lines.extend(f"- {line}" for line in group)
        lines.append("")
    return "\n".join(lines) + "\n"


def print_groups(result: GroupingResult, *, file: TextIO | None = None) -> None:
    """
    以控制台表格形式输出分组。
    """
    console = Console(file=file)
    table = Table(title="需要一起更新的包")
    table.add_column("分组", no_wrap=True, justify="right")
    table.add_column("包 / 版本")
    for index, group in enumerate(result.groups, start=1):
        for offset, line in enumerate(group):
            table.add_row(str(index) if offset == 0 else "", Text(line))
        if index < len(result.groups):
            table.add_section()
    console.print(table)
    console.print(
        f"目标包：{len(result.targets)}，分组：{len(result.groups)}，结果已写入 {result.output_path}",
        markup=False,
        soft_wrap=True,
    )


def print_sections(sections: dict[ReportSection, list[str]], *, file: TextIO | None = None) -> None:
    """
    输出报告中各区块的包数量与包名。
    """
    console = Console(file=file)
    for section in ReportSection:
        names = sections.get(section)
        if names is None:
            continue
        console.print(f"[bold]{section.value}[/bold] ({len(names)})")
        for name in names:
            console.print(f"  {name}", markup=False)


def print_diagnostics(diagnostics: tuple[Diagnostic, ...], *, file: TextIO | None = None) -> None:
    """
    将诊断信息输出到 stderr（警告黄色，错误红色）。
    """
    console = Console(file=file, stderr=file is None)
    for d in diagnostics:
        style = "red" if d.level == DiagnosticLevel.ERROR else "yellow"
        console.print(f"{d.level.value}: {d.message}", style=style, markup=False, highlight=False, soft_wrap=True)
        if d.hint:
            console.print(f"  提示：{d.hint}", style=style, markup=False, highlight=False, soft_wrap=True)

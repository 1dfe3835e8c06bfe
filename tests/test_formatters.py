from __future__ import annotations

import io
import json
from pathlib import Path

from ncu_groups.app import GroupingResult
from ncu_groups.diagnostics import Diagnostic, DiagnosticLevel
from ncu_groups.formatters import print_diagnostics, print_groups, render_json, render_markdown, write_result
from ncu_groups.models import ReportSection


def _make_result() -> GroupingResult:
    """
    构造一份用于 formatter 测试的最小结果。
    """
    return GroupingResult(
        section=ReportSection.MAJOR,
        targets=("eslint", "typescript"),
        components=(("eslint", "app"), ("typescript",)),
        groups=[["eslint: 8.4.0 -> 9.0.0", "app: undefined -> undefined"], ["typescript: 4.9.5 -> 5.4.5"]],
        output_path="result.json",
        diagnostics=(),
    )


def test_render_json_keeps_non_ascii() -> None:
    """
    JSON 输出为嵌套列表，且不转义非 ASCII 字符。
    """
    text = render_json([["@scope/pkg: ^1.0.0 -> ^2.0.0", "é: undefined -> undefined"]])
    assert json.loads(text) == [["@scope/pkg: ^1.0.0 -> ^2.0.0", "é: undefined -> undefined"]]
    assert "é" in text


def test_write_result_empty_list(tmp_path: Path) -> None:
    """
    没有分组时写出空列表。
    """
    path = tmp_path / "result.json"
    write_result(path, [])
    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_render_markdown_contains_stats_and_groups() -> None:
    """
    Markdown 渲染应包含统计信息与每个分组的条目。
    """
    md = render_markdown(_make_result())
    assert "ncu-groups 报告" in md
    assert "区块：Major" in md
    assert "目标包：2" in md
    assert "分组：2" in md
    assert "## 分组 1" in md
    assert "- eslint: 8.4.0 -> 9.0.0" in md
    assert "## 分组 2" in md


def test_print_groups_writes_table_to_file() -> None:
    """
    表格输出应包含每个包的行与统计行。
    """
    buf = io.StringIO()
    print_groups(_make_result(), file=buf)
    out = buf.getvalue()
    assert "eslint: 8.4.0 -> 9.0.0" in out
    assert "typescript: 4.9.5 -> 5.4.5" in out
    assert "结果已写入 result.json" in out


def test_print_diagnostics_includes_hint() -> None:
    """
    诊断输出应包含级别、信息与修复命令。
    """
    buf = io.StringIO()
    print_diagnostics(
        (
            Diagnostic(level=DiagnosticLevel.WARNING, message="未在行中找到包名：' 123'"),
            Diagnostic(level=DiagnosticLevel.ERROR, message="读取 npmlist.json 失败", hint="npm ls --depth=1 --json"),
        ),
        file=buf,
    )
    out = buf.getvalue()
    assert "warning: 未在行中找到包名" in out
    assert "error: 读取 npmlist.json 失败" in out
    assert "npm ls --depth=1 --json" in out


def test_print_groups_does_not_interpret_markup() -> None:
    """
    包名、版本与输出路径中的方括号应原样输出，不被当作 rich 标记。
    """
    result = GroupingResult(
        section=ReportSection.MAJOR,
        targets=("pkg",),
        components=(("pkg",),),
        groups=[["pkg: [bold]1.0.0 -> [red]2.0.0"]],
        output_path="out/[x]/result.json",
        diagnostics=(),
    )
    buf = io.StringIO()
    print_groups(result, file=buf)
    out = buf.getvalue()
    assert "pkg: [bold]1.0.0 -> [red]2.0.0" in out
    assert "out/[x]/result.json" in out

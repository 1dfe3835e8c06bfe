from __future__ import annotations

import re
from pathlib import Path

from ncu_groups.diagnostics import DiagnosticLog
from ncu_groups.models import ReportSection

REPORT_COMMAND = "npx npm-check-updates --format group > npm-check-updates"

# Lowercase letters, "@", "/" and "-" only. Scoped names such as
# "@types/node" must survive; digits and dots end the match.
PACKAGE_NAME_RE = re.compile(r"[a-z@/-]+")


def extract_package_name(line: str) -> str | None:
    """
    从报告行中取出第一个符合包名字符集的片段。
    """
    match = PACKAGE_NAME_RE.search(line)
    return match.group(0) if match else None


def _section_in_line(line: str) -> ReportSection | None:
    """
    返回行中出现的第一个区块名（按 Patch/Minor/Major 顺序匹配）。
    """
    for section in ReportSection:
        if section.value in line:
            return section
    return None


def parse_update_report(text: str, log: DiagnosticLog) -> dict[ReportSection, list[str]]:
    """
    解析 `npm-check-updates --format group` 的文本输出，按区块收集包名。

    区块标题行开启区块，空行结束区块；区块内无法识别包名的行会被跳过并记录警告。
    """
    sections: dict[ReportSection, list[str]] = {}
    current: ReportSection | None = None

    for line in text.splitlines():
        if current is not None:
            if not line.strip():
                current = None
                continue
            name = extract_package_name(line)
            if name is None:
                log.warn(f"未在行中找到包名：{line!r}")
                continue
            sections[current].append(name)
            continue

        section = _section_in_line(line)
        if section is not None:
            current = section
            sections.setdefault(section, [])
        elif line.strip():
            log.warn(f"未在行中找到区块名：{line!r}")

    return sections


def read_update_report(path: Path, log: DiagnosticLog) -> dict[ReportSection, list[str]] | None:
    """
    读取并解析分组报告文件；文件不可读时记录错误并返回 None。
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        log.error(f"读取 {path} 失败：{exc}", hint=REPORT_COMMAND)
        return None
    return parse_update_report(text, log)

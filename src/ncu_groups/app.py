from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ncu_groups.config import AppConfig
from ncu_groups.diagnostics import Diagnostic, DiagnosticLog
from ncu_groups.formatters import write_result
from ncu_groups.graph import group_packages
from ncu_groups.models import Component, ReportSection
from ncu_groups.ncu_report import read_update_report
from ncu_groups.npm_inputs import read_current_versions, read_dependency_map, read_target_versions
from ncu_groups.versions import annotate


@dataclass(frozen=True, slots=True)
class GroupingResult:
    """
    一次分组运行的完整结果。
    """

    section: ReportSection
    targets: tuple[str, ...]
    components: tuple[Component, ...]
    groups: list[list[str]]
    output_path: str
    diagnostics: tuple[Diagnostic, ...]


def select_targets(
    sections: dict[ReportSection, list[str]] | None,
    *,
    section: ReportSection,
    exclude: tuple[str, ...] = (),
) -> tuple[str, ...]:
    """
    取出指定区块中的包名（去重、保持顺序），并剔除 exclude 中的包。
    """
    if not sections:
        return ()
    excluded = set(exclude)
    names = [n for n in sections.get(section) or [] if n not in excluded]
    return tuple(dict.fromkeys(names))


def run_grouping(
    config: AppConfig,
    *,
    base_dir: Path | None = None,
    log: DiagnosticLog | None = None,
) -> GroupingResult:
    """
    读取全部输入，计算分组并写出结果文件。

    输入缺失或损坏只会降级为空结果并记录诊断，不会抛出异常；
    写出结果文件失败时 OSError 向上传播，此前的诊断仍保留在调用方传入的 log 中。
    """
    paths = config.paths.relative_to(base_dir) if base_dir is not None else config.paths
    if log is None:
        log = DiagnosticLog()

    sections = read_update_report(paths.report, log)
    all_deps = read_dependency_map(paths.npm_list, log)
    targets = select_targets(sections, section=config.section, exclude=config.exclude)

    components = group_packages(all_deps, targets)

    groups: list[list[str]] = []
    if components:
        current = read_current_versions(paths.package_json, log)
        target = read_target_versions(paths.updates, log)
        annotated = annotate(components, current, target)
        if annotated is None:
            log.error("缺少版本信息，未生成分组结果。")
        else:
            groups = annotated

    write_result(paths.output, groups)

    return GroupingResult(
        section=config.section,
        targets=targets,
        components=components,
        groups=groups,
        output_path=str(paths.output),
        diagnostics=log.items,
    )

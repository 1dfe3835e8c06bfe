from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


UNRESOLVED = "undefined"

DependencyMap = dict[str, tuple[str, ...]]
ReverseIndex = dict[str, tuple[str, ...]]
RelationGraph = dict[str, frozenset[str]]
Component = tuple[str, ...]
VersionMap = dict[str, str]


class ReportSection(str, Enum):
    """
    npm-check-updates 分组报告中的区块名称（按匹配优先级排列）。
    """

    PATCH = "Patch"
    MINOR = "Minor"
    MAJOR = "Major"


@dataclass(frozen=True, slots=True)
class PackageRelation:
    """
    过滤后的单个包与目标包之间的关系。
    """

    is_target: bool = False
    depends_on_targets: tuple[str, ...] = ()


FilteredRelations = dict[str, PackageRelation]

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DiagnosticLevel(str, Enum):
    """
    诊断信息级别。
    """

    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """
    一条面向用户的诊断信息（可附带修复命令）。
    """

    level: DiagnosticLevel
    message: str
    hint: str | None = None


class DiagnosticLog:
    """
    收集一次运行中产生的诊断信息，由 CLI 统一输出。
    """

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def warn(self, message: str, *, hint: str | None = None) -> None:
        self._items.append(Diagnostic(level=DiagnosticLevel.WARNING, message=message, hint=hint))

    def error(self, message: str, *, hint: str | None = None) -> None:
        self._items.append(Diagnostic(level=DiagnosticLevel.ERROR, message=message, hint=hint))

    @property
    def items(self) -> tuple[Diagnostic, ...]:
        return tuple(self._items)

    @property
    def has_errors(self) -> bool:
        """
        是否存在 error 级别的诊断。
        """
        return any(d.level == DiagnosticLevel.ERROR for d in self._items)

    def __len__(self) -> int:
        return len(self._items)

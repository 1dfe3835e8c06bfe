from __future__ import annotations

import json
from pathlib import Path

import pytest

NCU_REPORT = """\
Checking /work/demo/package.json

Minor   Backwards-compatible features
 lodash  ^4.16.0  →  ^4.17.21

Major   Potentially breaking API changes
 eslint       ^8.4.0  →  ^9.0.0
 typescript   ~4.9.5  →  ~5.4.5

"""


@pytest.fixture
def npm_project(tmp_path: Path) -> Path:
    """
    在临时目录中准备一套完整的输入文件（与示例场景一致）。
    """
    (tmp_path / "npm-check-updates").write_text(NCU_REPORT, encoding="utf-8")
    (tmp_path / "npmlist.json").write_text(
        json.dumps(
            {
                "name": "demo",
                "dependencies": {
                    "app": {"dependencies": {"eslint": {}, "lodash": {}}},
                    "tool": {"dependencies": {"eslint": {}, "typescript": {}}},
                    "other": {"dependencies": {"lodash": {}}},
                },
            }
        ),
        encoding="utf-8",
    )
    (tmp_path / "package.json").write_text(
        json.dumps({"dependencies": {"eslint": "8.4.0"}}),
        encoding="utf-8",
    )
    (tmp_path / "package-updates.json").write_text(
        json.dumps({"devDependencies": {"eslint": "9.0.0"}}),
        encoding="utf-8",
    )
    return tmp_path

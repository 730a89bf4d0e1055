from pathlib import Path

import pytest
from monocheck_linter import AliasTable, RuleTable, ScanContext


def _write(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def write():
    return _write


@pytest.fixture
def project(tmp_path):
    """A small TypeScript project:

    proj/src/{a/b.ts, utils/format.ts, components/Button.ts, x.ts}
    proj/lib/helper.ts (not under any alias)
    proj/node_modules/@installed/pkg
    """
    root = tmp_path / "proj"
    src = root / "src"
    _write(src / "a" / "b.ts", "export const b = 1;\n")
    _write(src / "utils" / "format.ts", "export const format = () => '';\n")
    _write(src / "components" / "Button.ts", "export const Button = 1;\n")
    _write(src / "x.ts", "export {};\n")
    _write(root / "lib" / "helper.ts", "export const helper = 1;\n")
    _write(root / "node_modules" / "@installed" / "pkg" / "index.js", "module.exports = {};\n")
    return root


@pytest.fixture
def aliases(project):
    return AliasTable.from_mapping(
        {
            "@app": project / "src",
            "@components": project / "src" / "components",
        }
    )


@pytest.fixture
def make_context(project, aliases):
    def _make(overrides=(), community=(), dependencies=(), alias_table=None):
        return ScanContext(
            aliases=alias_table if alias_table is not None else aliases,
            rules=RuleTable(overrides, community),
            dependencies=frozenset(dependencies),
            project_root=project,
        )

    return _make

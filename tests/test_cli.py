import json

import pytest
from monocheck_cli import main
from monocheck_cli.main import app
from monocheck_cli.models import CommunityRuleModel
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def no_community(monkeypatch):
    def install(rules=()):
        monkeypatch.setattr(main, "fetch_community_rules", lambda url, timeout=None: list(rules))

    install()
    return install


def write_config(path, directory, report, aliases):
    path.write_text(
        json.dumps(
            {
                "directories": [{"path": directory, "reportPath": report}],
                "aliases": {prefix: {"basePath": str(base)} for prefix, base in aliases.items()},
            }
        )
    )
    return path


@pytest.fixture
def app_project(workdir, write):
    """app/src/index.ts importing ./lib/b, which @app can express."""
    write(workdir / "app" / "src" / "lib" / "b.ts", "export const b = 1;\n")
    index = write(workdir / "app" / "src" / "index.ts", "import { b } from './lib/b';\n")
    config = write_config(
        workdir / "monocheck.config.json", "app/src", "app/report.json", {"@app": workdir / "app" / "src"}
    )
    return index, config


def test_check_help():
    result = runner.invoke(app, ["check", "--help"])
    assert result.exit_code == 0
    assert "Check import paths" in result.output


def test_check_writes_report_and_fails_on_issues(workdir, project, write, no_community):
    write(
        project / "src" / "pages" / "home.ts",
        "import { b } from '../a/b';\n// import { f } from '../utils/format';\nimport { m } from './missing';\n",
    )
    config = write_config(workdir / "cfg.json", "proj/src", "proj/report.json", {"@app": project / "src"})

    result = runner.invoke(app, ["check", "--config", str(config), "--no-community"])

    assert result.exit_code == 1
    assert "ShouldUseAlias: proj/src/pages/home.ts:1 [../a/b]" in result.output
    report = json.loads((project / "report.json").read_text())
    assert report["totalFiles"] == 5
    assert report["totalIssues"] == 3
    assert report["standardIssues"] == 2
    assert report["commentedIssues"] == 1
    assert report["fixedIssues"] == 0
    first = report["issues"][0]
    assert first["file"] == "proj/src/pages/home.ts"
    assert first["importPath"] == "../a/b"
    assert first["category"] == "ShouldUseAlias"
    assert first["commented"] is False
    assert report["issues"][2]["commented"] is True


def test_check_fix_resolves_everything(app_project, no_community):
    index, config = app_project

    result = runner.invoke(app, ["check", "--config", str(config), "--fix", "--no-community"])

    assert result.exit_code == 0
    assert index.read_text() == "import { b } from '@app/lib/b';\n"
    report = json.loads((config.parent / "app" / "report.json").read_text())
    assert report["fixedIssues"] == 1
    assert report["issues"][0]["fixed"] is True

    rerun = runner.invoke(app, ["check", "--config", str(config), "--no-community"])
    assert rerun.exit_code == 0
    assert json.loads((config.parent / "app" / "report.json").read_text())["totalIssues"] == 0


def test_check_dry_run_writes_nothing(app_project, no_community):
    index, config = app_project

    result = runner.invoke(app, ["check", "--config", str(config), "--fix", "--dry-run", "--no-community"])

    assert result.exit_code == 1
    assert index.read_text() == "import { b } from './lib/b';\n"
    assert not (config.parent / "app" / "report.json").exists()


def test_check_interactive_decline(app_project, no_community):
    index, config = app_project

    result = runner.invoke(app, ["check", "--config", str(config), "--fix", "--interactive"], input="n\n")

    assert "Apply fix?" in result.output
    assert result.exit_code == 1
    assert index.read_text() == "import { b } from './lib/b';\n"
    report = json.loads((config.parent / "app" / "report.json").read_text())
    assert report["issues"][0]["userChoice"] == "skipped"


def test_check_interactive_accept(app_project, no_community):
    index, config = app_project

    result = runner.invoke(app, ["check", "--config", str(config), "--fix", "--interactive"], input="y\n")

    assert result.exit_code == 0
    assert index.read_text() == "import { b } from '@app/lib/b';\n"


def test_community_exclude_is_not_actionable(app_project, no_community):
    index, config = app_project
    index.write_text("import React from 'react';\n")
    no_community([CommunityRuleModel.model_validate({"from": "react", "action": "exclude"})])

    result = runner.invoke(app, ["check", "--config", str(config)])

    assert result.exit_code == 0
    assert "RuleMatch" in result.output
    assert "Excluded from checks" in result.output


def test_missing_community_rules_warns(app_project, no_community):
    _, config = app_project
    result = runner.invoke(app, ["check", "--config", str(config), "--fix"])
    assert "No community rules available" in result.output
    assert result.exit_code == 0


def test_invalid_config_exits_with_2(workdir):
    config = workdir / "monocheck.config.json"
    config.write_text("{broken")
    result = runner.invoke(app, ["check", "--config", str(config), "--no-community"])
    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_duplicate_alias_prefix_exits_with_2(workdir):
    config = workdir / "monocheck.config.json"
    config.write_text(
        json.dumps(
            {
                "directories": [{"path": "src"}],
                "aliases": {"@app": {"basePath": "src"}, "@app/*": {"basePath": "lib"}},
            }
        )
    )
    result = runner.invoke(app, ["check", "--config", str(config), "--no-community"])
    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_no_directories_configured(workdir):
    result = runner.invoke(app, ["check", "--config", str(workdir / "none.json"), "--no-community"])
    assert result.exit_code == 1
    assert "monocheck init" in result.output


def test_init_discovers_projects(workdir, write):
    web = workdir / "ws" / "packages" / "web"
    write(web / "tsconfig.json", json.dumps({"compilerOptions": {"paths": {"@web/*": ["./src/*"]}}}))
    write(web / "src" / "index.ts", "")
    config = workdir / "monocheck.config.json"

    result = runner.invoke(app, ["init", "--root", "ws", "--config", str(config)])

    assert result.exit_code == 0
    data = json.loads(config.read_text())
    assert data["directories"][0]["path"] == "ws/packages/web/src"
    assert data["aliases"]["@web"]["basePath"] == str(web / "src")

    again = runner.invoke(app, ["init", "--root", "ws", "--config", str(config)])
    assert "0 directories, 0 aliases" in again.output


def test_init_without_projects(workdir):
    result = runner.invoke(app, ["init", "--root", str(workdir), "--config", str(workdir / "c.json")])
    assert result.exit_code == 1


def test_add_rule(workdir):
    config = workdir / "monocheck.config.json"
    result = runner.invoke(
        app,
        ["add-rule", "@old", "--action", "rename", "--replacement", "@new", "--prefix-only", "--config", str(config)],
    )

    assert result.exit_code == 0
    data = json.loads(config.read_text())
    assert data["overrideRules"]["@old"] == {"action": "rename", "replacement": "@new", "prefixOnly": True}


def test_add_rule_requires_replacement(workdir):
    config = workdir / "monocheck.config.json"
    result = runner.invoke(app, ["add-rule", "x", "--action", "replace-method", "--config", str(config)])
    assert result.exit_code == 2
    assert not config.exists()

    ok = runner.invoke(app, ["add-rule", "x", "--action", "exclude", "--config", str(config)])
    assert ok.exit_code == 0


def test_rules_lists_overrides_and_community(workdir, no_community):
    config = workdir / "monocheck.config.json"
    runner.invoke(app, ["add-rule", "legacy", "--action", "exclude", "--config", str(config)])
    no_community(
        [CommunityRuleModel.model_validate({"from": "moment", "to": "date-fns", "action": "replace-method"})]
    )

    result = runner.invoke(app, ["rules", "--config", str(config)])

    assert result.exit_code == 0
    assert "legacy: exclude" in result.output
    assert "Community rules (1):" in result.output
    assert "moment: replace-method → date-fns" in result.output

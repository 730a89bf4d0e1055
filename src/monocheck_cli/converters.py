import os
from pathlib import Path
from typing import Iterable, List

from monocheck_linter.aliases import AliasTable
from monocheck_linter.models import AliasEntry, DirectoryReport, Issue, Rule, RuleSource, ScanContext
from monocheck_linter.rule_table import RuleTable

from .config import DirectoryConfig, MonocheckConfig
from .models import CommunityRuleModel, DirectoryReportModel, ReportIssue


def alias_table_from_config(config: MonocheckConfig) -> AliasTable:
    return AliasTable(
        AliasEntry(prefix=prefix, base_path=Path(alias.base_path), description=alias.description)
        for prefix, alias in config.aliases.items()
    )


def override_rules_from_config(config: MonocheckConfig) -> List[Rule]:
    return [
        Rule(
            match_key=key,
            action=rule.action,
            replacement=rule.replacement,
            prefix_only=rule.prefix_only,
            source=RuleSource.USER_OVERRIDE,
        )
        for key, rule in config.override_rules.items()
    ]


def community_rule_to_rule(rule: CommunityRuleModel) -> Rule:
    """Convert a fetched community entry to an internal rule"""
    return Rule(
        match_key=rule.from_,
        action=rule.action,
        replacement=rule.to or None,
        prefix_only=rule.prefix_only,
        priority=rule.priority,
        source=RuleSource.COMMUNITY,
        description=rule.description,
        category=rule.category,
    )


def build_scan_context(
    directory: DirectoryConfig,
    config: MonocheckConfig,
    community_rules: Iterable[CommunityRuleModel] = (),
    project_root: Path | None = None,
) -> ScanContext:
    rules = RuleTable(
        overrides=override_rules_from_config(config),
        community=[community_rule_to_rule(r) for r in community_rules],
    )
    return ScanContext(
        aliases=alias_table_from_config(config),
        rules=rules,
        dependencies=frozenset(directory.dependencies),
        project_root=project_root,
    )


def _relative(path: Path, root: Path) -> str:
    try:
        return Path(os.path.relpath(path, root)).as_posix()
    except ValueError:
        # different drive on Windows
        return str(path)


def internal_issue_to_report_issue(issue: Issue, root: Path) -> ReportIssue:
    """Convert an internal dataclass issue to an external Pydantic issue"""
    occurrence = issue.occurrence
    return ReportIssue(
        file=_relative(occurrence.file_path, root),
        line=occurrence.line_number,
        import_path=occurrence.display_path,
        category=issue.category,
        issue=issue.message,
        suggestion=issue.suggestion,
        replacement=issue.replacement,
        fixed=issue.fixed,
        commented=occurrence.is_commented,
        user_choice="skipped" if issue.skipped_by_user else None,
    )


def directory_report_to_model(report: DirectoryReport, root: Path) -> DirectoryReportModel:
    return DirectoryReportModel(
        total_files=report.total_files,
        total_issues=report.total_issues,
        standard_issues=report.standard_issues,
        commented_issues=report.commented_issues,
        fixed_issues=report.fixed_issues,
        issues=[internal_issue_to_report_issue(i, root) for i in report.issues],
    )

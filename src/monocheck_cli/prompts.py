import typer
from monocheck_linter.models import Issue


class ConsolePrompt:
    """Interactive mode: ask on the terminal before each fix"""

    def confirm(self, issue: Issue) -> bool:
        occurrence = issue.occurrence
        typer.echo(f"\nIssue in {occurrence.file_path}:{occurrence.line_number}")
        typer.echo(f"  Import: {occurrence.display_path}")
        typer.echo(f"  Problem: {issue.message}")
        typer.echo(f"  Suggested fix: {issue.suggestion or 'No suggestion available'}")
        return typer.confirm("Apply fix?", default=False)

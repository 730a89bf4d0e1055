from typing import List, Optional

from monocheck_linter.models import IssueCategory, RuleAction
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ReportIssue(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str
    line: int
    import_path: str = Field(serialization_alias="importPath", validation_alias=AliasChoices("importPath", "import_path"))
    category: IssueCategory
    issue: str
    suggestion: Optional[str] = None
    replacement: Optional[str] = None
    fixed: bool = False
    commented: bool = False
    user_choice: Optional[str] = Field(
        None, serialization_alias="userChoice", validation_alias=AliasChoices("userChoice", "user_choice")
    )


class DirectoryReportModel(BaseModel):
    """Per-directory report persisted as JSON"""

    model_config = ConfigDict(populate_by_name=True)

    total_files: int = Field(serialization_alias="totalFiles", validation_alias=AliasChoices("totalFiles", "total_files"))
    total_issues: int = Field(serialization_alias="totalIssues", validation_alias=AliasChoices("totalIssues", "total_issues"))
    standard_issues: int = Field(
        serialization_alias="standardIssues", validation_alias=AliasChoices("standardIssues", "standard_issues")
    )
    commented_issues: int = Field(
        serialization_alias="commentedIssues", validation_alias=AliasChoices("commentedIssues", "commented_issues")
    )
    fixed_issues: int = Field(serialization_alias="fixedIssues", validation_alias=AliasChoices("fixedIssues", "fixed_issues"))
    issues: List[ReportIssue] = Field(default_factory=list)


class RuleExample(BaseModel):
    before: str = ""
    after: str = ""


class CommunityRuleModel(BaseModel):
    """One entry of the shared special-cases table"""

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str = ""
    action: RuleAction
    description: str = ""
    prefix_only: bool = Field(False, alias="prefixOnly")
    category: str = ""
    priority: int = 0
    examples: List[RuleExample] = Field(default_factory=list)

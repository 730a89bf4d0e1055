import json
import tomllib
from pathlib import Path
from typing import Dict, List, Optional

from monocheck_linter.aliases import normalize_prefix
from monocheck_linter.errors import MonocheckError
from monocheck_linter.models import RuleAction
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_CONFIG_PATH = Path("monocheck.config.json")
DEFAULT_COMMUNITY_URL = "https://raw.githubusercontent.com/ubuntupunk/repofix/main/special-cases.json"
REPORT_FILE_NAME = "import-check-report.json"


class ConfigError(MonocheckError):
    """The configuration file could not be read or validated"""


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AliasConfig(_Model):
    base_path: str = Field(validation_alias=AliasChoices("basePath", "path", "base_path"), serialization_alias="basePath")
    description: str = ""


class OverrideRuleConfig(_Model):
    action: RuleAction
    # `value` is the key older config files use
    replacement: Optional[str] = Field(None, validation_alias=AliasChoices("replacement", "value"))
    prefix_only: bool = Field(
        False, validation_alias=AliasChoices("prefixOnly", "prefix_only"), serialization_alias="prefixOnly"
    )


class DirectoryConfig(_Model):
    path: str
    manifest_ref: Optional[str] = Field(
        None, validation_alias=AliasChoices("manifestRef", "tsconfig", "manifest_ref"), serialization_alias="manifestRef"
    )
    report_path: Optional[str] = Field(
        None, validation_alias=AliasChoices("reportPath", "report", "report_path"), serialization_alias="reportPath"
    )
    package_json: Optional[str] = Field(
        None, validation_alias=AliasChoices("packageJson", "package_json"), serialization_alias="packageJson"
    )
    dependencies: Dict[str, str] = Field(default_factory=dict)
    workspace_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("workspaceName", "workspace_name"), serialization_alias="workspaceName"
    )

    @property
    def label(self) -> str:
        return self.workspace_name or self.path

    def scan_root(self) -> Path:
        """Directory to scan; falls back to the manifest's directory when `path` is missing."""
        path = Path(self.path)
        if not path.exists() and self.manifest_ref:
            return Path(self.manifest_ref).parent
        return path

    def resolved_report_path(self) -> Path:
        if self.report_path:
            return Path(self.report_path)
        return Path(self.path).parent / REPORT_FILE_NAME


class MonocheckConfig(_Model):
    directories: List[DirectoryConfig] = Field(default_factory=list)
    aliases: Dict[str, AliasConfig] = Field(default_factory=dict)
    override_rules: Dict[str, OverrideRuleConfig] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("overrideRules", "specialCases", "override_rules"),
        serialization_alias="overrideRules",
    )
    community_url: str = Field(
        DEFAULT_COMMUNITY_URL,
        validation_alias=AliasChoices("communityUrl", "community_url"),
        serialization_alias="communityUrl",
    )

    @field_validator("aliases")
    @classmethod
    def _unique_prefixes(cls, aliases: Dict[str, AliasConfig]) -> Dict[str, AliasConfig]:
        # `@app` and `@app/*` name the same alias
        seen: Dict[str, str] = {}
        for key in aliases:
            prefix = normalize_prefix(key)
            if prefix in seen:
                raise ValueError(f"aliases '{seen[prefix]}' and '{key}' both define prefix '{prefix}'")
            seen[prefix] = key
        return aliases


def load_config(config_path: Path | None) -> MonocheckConfig:
    """Load monocheck.config.json, or the [tool.monocheck] table of a TOML file.

    A missing file gives the empty configuration.
    """
    if config_path is None or not config_path.exists():
        return MonocheckConfig()

    try:
        if config_path.suffix == ".toml":
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return MonocheckConfig.model_validate(data.get("tool", {}).get("monocheck", {}))
        return MonocheckConfig.model_validate(json.loads(config_path.read_text(encoding="utf-8")))
    except (OSError, ValueError, tomllib.TOMLDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e


def save_config(config: MonocheckConfig, config_path: Path) -> None:
    payload = config.model_dump(by_alias=True, exclude_none=True, mode="json")
    config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")

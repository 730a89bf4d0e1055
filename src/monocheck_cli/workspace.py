import json
import logging
import os
import re
from pathlib import Path
from typing import Dict, List

from monocheck_linter.aliases import normalize_path, normalize_prefix

from .config import REPORT_FILE_NAME, AliasConfig, DirectoryConfig

logger = logging.getLogger(__name__)

# A string literal is kept; a comment or a trailing comma is dropped.
_JSONC_NOISE = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/|,(?=\s*[}\]])', re.DOTALL)


def read_jsonc(path: Path) -> dict:
    """Read tsconfig-style JSON, which allows comments and trailing commas."""
    text = path.read_text(encoding="utf-8")
    return json.loads(_JSONC_NOISE.sub(lambda m: m.group(1) or "", text))


def scan_workspace(root: Path) -> List[DirectoryConfig]:
    """Find every project under root that has a tsconfig.json."""
    directories: List[DirectoryConfig] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d != "node_modules" and not d.startswith("."))
        if "tsconfig.json" not in filenames:
            continue

        base = Path(dirpath)
        src = base / "src"
        directory = DirectoryConfig(
            path=str(src if src.is_dir() else base),
            manifest_ref=str(base / "tsconfig.json"),
            report_path=str(base / REPORT_FILE_NAME),
        )

        if "package.json" in filenames:
            package_json = base / "package.json"
            try:
                package = json.loads(package_json.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.warning("Could not read %s: %s", package_json, e)
            else:
                directory.package_json = str(package_json)
                directory.workspace_name = package.get("name")
                directory.dependencies = {
                    **(package.get("dependencies") or {}),
                    **(package.get("devDependencies") or {}),
                }

        logger.debug("Discovered project %s", directory.path)
        directories.append(directory)
    return directories


def extract_aliases(tsconfig_path: Path) -> Dict[str, AliasConfig]:
    """Read `compilerOptions.paths`; targets resolve against `baseUrl` or the tsconfig directory."""
    try:
        data = read_jsonc(tsconfig_path)
    except (OSError, ValueError) as e:
        logger.warning("Could not read aliases from %s: %s", tsconfig_path, e)
        return {}

    options = data.get("compilerOptions") or {}
    base_dir = tsconfig_path.parent / options.get("baseUrl", ".")

    aliases: Dict[str, AliasConfig] = {}
    for alias, targets in (options.get("paths") or {}).items():
        if not targets:
            continue
        prefix = normalize_prefix(alias)
        if prefix in aliases:
            continue
        aliases[prefix] = AliasConfig(
            base_path=str(normalize_path(base_dir / targets[0])),
            description=f"Auto-detected from {tsconfig_path}",
        )
    return aliases

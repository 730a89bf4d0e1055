from pathlib import Path

from .aliases import AliasTable, normalize_path
from .models import AliasEntry

SOURCE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")


def is_relative(specifier: str) -> bool:
    return specifier.startswith(".")


def package_name(specifier: str) -> str:
    """`@scope/name/deep` → `@scope/name`, `lodash/fp` → `lodash`."""
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) > 1:
        return "/".join(parts[:2])
    return parts[0]


class PathResolver:
    """Resolves import specifiers to absolute paths using read-only existence checks.

    Search order for non-relative specifiers:
    1. Path aliases (two-segment root, then one-segment root)
    2. `node_modules` next to the importing file or any of its ancestors,
       then under the project root
    """

    def __init__(self, extensions: tuple[str, ...] = SOURCE_EXTENSIONS):
        self.extensions = extensions

    def resolve(
        self,
        specifier: str,
        containing_file: Path,
        aliases: AliasTable,
        project_root: Path | None = None,
    ) -> Path | None:
        """Absolute path of the imported module, or None when unresolved."""
        if is_relative(specifier):
            return self.resolve_relative(specifier, containing_file)

        entry = aliases.lookup_root(specifier)
        if entry is not None:
            return self.resolve_alias(specifier, entry)

        return self.resolve_package(specifier, containing_file, project_root)

    def resolve_relative(self, specifier: str, containing_file: Path) -> Path | None:
        candidate = self.expected_location(specifier, containing_file)
        return candidate if self._exists(candidate) else None

    def resolve_alias(self, specifier: str, entry: AliasEntry) -> Path | None:
        remainder = specifier[len(entry.prefix) :].lstrip("/")
        candidate = normalize_path(entry.base_path / remainder) if remainder else entry.base_path
        return candidate if self._exists(candidate) else None

    def resolve_package(
        self, specifier: str, containing_file: Path, project_root: Path | None = None
    ) -> Path | None:
        for modules_dir in self._node_modules_dirs(containing_file, project_root):
            candidate = normalize_path(modules_dir / specifier)
            if self._exists(candidate):
                return candidate
        return None

    def has_package_artifact(
        self, package: str, containing_file: Path, project_root: Path | None = None
    ) -> bool:
        """True when an installed copy of a package exists on disk."""
        return any(
            (modules_dir / package).exists()
            for modules_dir in self._node_modules_dirs(containing_file, project_root)
        )

    def expected_location(self, specifier: str, containing_file: Path) -> Path:
        """Where a relative specifier points, whether or not anything is there."""
        return normalize_path(Path(containing_file).parent / specifier)

    def _exists(self, candidate: Path) -> bool:
        if candidate.exists():
            return True
        return any(Path(f"{candidate}{ext}").exists() for ext in self.extensions)

    def _node_modules_dirs(self, containing_file: Path, project_root: Path | None) -> list[Path]:
        start = normalize_path(containing_file).parent
        dirs = [d / "node_modules" for d in (start, *start.parents)]
        if project_root is not None:
            root_modules = normalize_path(project_root) / "node_modules"
            if root_modules not in dirs:
                dirs.append(root_modules)
        return dirs

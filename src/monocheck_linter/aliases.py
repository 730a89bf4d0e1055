import os
from pathlib import Path
from typing import Iterable, Iterator, Mapping

from .models import AliasEntry


def normalize_prefix(prefix: str) -> str:
    """`@app/*` and `@app/` both become `@app`."""
    if prefix.endswith("/*"):
        prefix = prefix[:-2]
    return prefix.rstrip("/") or prefix


def normalize_path(path: str | Path) -> Path:
    """Absolute, lexically normalized path; symlinks are left alone."""
    text = str(path)
    if text.endswith("/*"):
        text = text[:-2]
    return Path(os.path.normpath(os.path.abspath(text)))


def is_under(path: Path, base: Path) -> bool:
    return path == base or base in path.parents


def alias_roots(specifier: str) -> list[str]:
    """Candidate alias roots of a specifier, most specific first.

    `@scope/name/x` → [`@scope/name`, `@scope`]; `utils` → [`utils`].
    """
    parts = specifier.split("/")
    if len(parts) > 1:
        return ["/".join(parts[:2]), parts[0]]
    return [parts[0]]


class AliasTable:
    """Normalized mapping from alias prefix to absolute base directory"""

    def __init__(self, entries: Iterable[AliasEntry] = ()):
        self._entries: dict[str, AliasEntry] = {}
        for entry in entries:
            prefix = normalize_prefix(entry.prefix)
            if prefix in self._entries:
                raise ValueError(f"Duplicate alias prefix: {prefix}")
            self._entries[prefix] = AliasEntry(
                prefix=prefix,
                base_path=normalize_path(entry.base_path),
                description=entry.description,
            )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str | Path]) -> "AliasTable":
        return cls(AliasEntry(prefix=k, base_path=Path(v)) for k, v in mapping.items())

    def __iter__(self) -> Iterator[AliasEntry]:
        return iter(self._entries.values())

    def lookup_root(self, specifier: str) -> AliasEntry | None:
        """The alias a specifier is written against, if any (two-segment root first)."""
        for root in alias_roots(specifier):
            entry = self._entries.get(root)
            if entry is not None:
                return entry
        return None

    def shadows(self, specifier: str) -> bool:
        """True when some alias prefix is a plain string prefix of the specifier."""
        return any(specifier.startswith(prefix) for prefix in self._entries)

    def best_match(self, path: Path) -> AliasEntry | None:
        """Alias whose base directory most specifically contains a path.

        Longest base path wins, then the longer prefix string; any remaining
        tie goes to the entry declared first.
        """
        path = normalize_path(path)
        candidates = [e for e in self._entries.values() if is_under(path, e.base_path)]
        if not candidates:
            return None
        # max() keeps the first of equal keys, which preserves table order on ties
        return max(candidates, key=lambda e: (len(e.base_path.parts), len(e.prefix)))

    def to_alias_specifier(self, path: Path, entry: AliasEntry) -> str | None:
        """Rewrite an absolute path as `<prefix>/<relative>`; None if outside the alias."""
        path = normalize_path(path)
        if not is_under(path, entry.base_path):
            return None
        relative = path.relative_to(entry.base_path).as_posix()
        if relative == ".":
            return entry.prefix
        return f"{entry.prefix}/{relative}"

import logging
from pathlib import Path
from typing import List

from monocheck_tree_sitter import TSParser

from .autofix import Rewriter
from .classifier import Classifier
from .confirm import AlwaysAccept, ConfirmStrategy
from .extractor import ImportExtractor
from .models import DirectoryReport, Issue, ScanContext
from .registry import CheckRegistry
from .reporter import Reporter

logger = logging.getLogger(__name__)

PRIMARY_PATTERNS = ("*.ts", "*.tsx")
FALLBACK_PATTERNS = ("*.ts", "*.tsx", "*.js", "*.jsx")


class LinterEngine:
    """Core engine for checking and fixing import specifiers.

    One directory group is processed at a time, one file at a time, and
    within a file occurrences are handled in document order. A file is
    classified completely before any fix is applied, and written once.
    """

    def __init__(
        self,
        fix: bool = False,
        dry_run: bool = False,
        confirm: ConfirmStrategy | None = None,
        registry: CheckRegistry | None = None,
    ):
        self.fix = fix
        self.dry_run = dry_run
        self.confirm = confirm or AlwaysAccept()
        parser = TSParser()
        self.extractor = ImportExtractor(parser)
        self.classifier = Classifier(registry)
        self.rewriter = Rewriter(parser)

    def collect_files(self, directory: Path) -> List[Path]:
        files = self._glob(directory, PRIMARY_PATTERNS)
        if not files:
            logger.info("No .ts/.tsx files found in %s, trying .js/.jsx as well", directory)
            files = self._glob(directory, FALLBACK_PATTERNS)
        return files

    @staticmethod
    def _glob(directory: Path, patterns: tuple[str, ...]) -> List[Path]:
        found = set()
        for pattern in patterns:
            for path in directory.rglob(pattern):
                if "node_modules" in path.parts or not path.is_file():
                    continue
                found.add(path)
        return sorted(found)

    def analyze_source(self, source: str, file_path: Path, context: ScanContext) -> List[Issue]:
        """Classify every import occurrence of a source text"""
        occurrences = self.extractor.extract(source, file_path)
        return self.classifier.classify_all(occurrences, context)

    def analyze_file(self, file_path: Path, context: ScanContext) -> List[Issue]:
        file_path = Path(file_path).absolute()
        source = file_path.read_text(encoding="utf-8")
        return self.analyze_source(source, file_path, context)

    def fix_source(self, source: str, issues: List[Issue]) -> str:
        """Ask the confirmation strategy about each fixable issue, then rewrite."""
        accepted = []
        for issue in issues:
            if not issue.auto_fixable or issue.fixed or issue.skipped_by_user:
                continue
            if self.confirm.confirm(issue):
                accepted.append(issue)
            else:
                issue.skipped_by_user = True
                logger.info("Skipped fixing %s", issue.occurrence.display_path)
        return self.rewriter.apply_fixes(source, accepted, dry_run=self.dry_run)

    def process_file(self, file_path: Path, context: ScanContext) -> List[Issue]:
        file_path = Path(file_path).absolute()
        source = file_path.read_text(encoding="utf-8")
        issues = self.analyze_source(source, file_path, context)

        if self.fix and issues:
            new_source = self.fix_source(source, issues)
            if new_source != source:
                if self.dry_run:
                    logger.info("[dry run] would rewrite %s", file_path)
                else:
                    file_path.write_text(new_source, encoding="utf-8")
                    logger.info("Saved changes to %s", file_path)
        return issues

    def scan_directory(self, directory: Path, context: ScanContext) -> DirectoryReport:
        """Scan one directory group; a failing file is logged and skipped."""
        directory = Path(directory).absolute()
        files = self.collect_files(directory)
        logger.info("Found %d files to process in %s", len(files), directory)

        issues: List[Issue] = []
        failed: List[Path] = []
        for file_path in files:
            try:
                issues.extend(self.process_file(file_path, context))
            except Exception as e:
                logger.error("Error processing %s: %s", file_path, e)
                failed.append(file_path)

        return Reporter.summarize(directory, len(files), issues, failed)

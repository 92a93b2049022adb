"""BuildOptimizer: the end-to-end scan, filter, chunk and report pipeline."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from cssopt.analytics import (
    AnalyticsReport,
    check_budgets,
    defined_utilities,
    file_size,
    recommendations,
    size_savings,
    unused_utilities,
)
from cssopt.config import OptimizerConfig
from cssopt.errors import OutputError, StylesheetReadError
from cssopt.filters import CHUNK_CATEGORIES, build_chunks, critical_css, optimize_css
from cssopt.model.diagnostic import Severity
from cssopt.model.rule import ParsedStylesheet
from cssopt.scanner import UsageScanner
from cssopt.stylesheet import parse_stylesheet

logger = logging.getLogger(__name__)

OPTIMIZED_CSS_NAME = "index.optimized.css"
CRITICAL_CSS_NAME = "critical.css"
CHUNKS_DIR_NAME = "chunks"
ANALYTICS_NAME = "bundle-analytics.json"
JS_DIR_NAME = "js"

_DIAGNOSTIC_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
}


def read_stylesheet(path: str | Path) -> str:
    """Read stylesheet text; any read or decode failure is a StylesheetReadError."""
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StylesheetReadError(f"Cannot read stylesheet: {exc.strerror or exc}", path=path) from exc
    except UnicodeDecodeError as exc:
        raise StylesheetReadError(f"Stylesheet is not valid UTF-8: {exc.reason}", path=path) from exc


def _write_text(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"Cannot write output: {exc.strerror or exc}", path=path) from exc


def _ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"Cannot create directory: {exc.strerror or exc}", path=path) from exc


class BuildOptimizer:
    """Tree-shakes a utility stylesheet against the classes a project uses.

    One instance holds the state of one run: the used-class set, the
    critical-class set resolved for critical extraction, and the generated
    chunks.  Every failure propagates; there is no partial recovery.
    """

    def __init__(self, config: OptimizerConfig | None = None) -> None:
        self.config = config or OptimizerConfig()
        self.scanner = UsageScanner()
        self.critical: set[str] = set()
        self.chunks: dict[str, str] = {}
        self.sheet: ParsedStylesheet | None = None

    @property
    def used(self) -> set[str]:
        return self.scanner.used

    # --- steps ------------------------------------------------------------

    def copy_js_modules(self) -> list[Path]:
        """Copy ``*.js`` files from the JS source dir into ``<output>/js``."""
        source = Path(self.config.js_source_dir)
        dest = Path(self.config.output_dir) / JS_DIR_NAME
        _ensure_dir(dest)
        copied: list[Path] = []
        if not source.is_dir():
            return copied
        for path in sorted(source.iterdir()):
            if not (path.is_file() and path.name.endswith(".js")):
                continue
            target = dest / path.name
            try:
                shutil.copyfile(path, target)
            except OSError as exc:
                raise OutputError(f"Cannot copy {path.name}: {exc.strerror or exc}", path=target) from exc
            logger.info("Copied %s to %s", path.name, dest)
            copied.append(target)
        return copied

    def analyze_usage(self, source_dir: str | Path | None = None) -> set[str]:
        """Scan the source tree and fixture files for used utilities."""
        source_dir = self.config.source_dir if source_dir is None else source_dir
        return self.scanner.analyze(source_dir, self.config.fixtures)

    def load_stylesheet(self, path: str | Path | None = None) -> ParsedStylesheet:
        path = Path(self.config.source_css if path is None else path)
        sheet = parse_stylesheet(read_stylesheet(path))
        for diag in sheet.diagnostics:
            logger.log(_DIAGNOSTIC_LEVELS[diag.severity], "%s: %s", path, diag)
        self.sheet = sheet
        return sheet

    def generate_optimized_css(self, sheet: ParsedStylesheet) -> str:
        return optimize_css(sheet, self.used)

    def resolve_critical(self, critical: set[str] | None = None) -> set[str]:
        """Return the critical-class set to use.

        An empty or missing set falls back to the utilities referenced by
        the critical fixture file; if that file is absent the set stays
        empty and only base styles are critical.
        """
        if critical:
            return set(critical)
        fixture = Path(self.config.critical_fixture)
        if not fixture.is_file():
            logger.debug("Critical fixture %s not present", fixture)
            return set()
        return UsageScanner().scan_file(fixture)

    def extract_critical_css(self, sheet: ParsedStylesheet, critical: set[str] | None = None) -> str:
        self.critical = self.resolve_critical(critical if critical is not None else self.critical)
        return critical_css(sheet, self.critical)

    def create_chunks(self, sheet: ParsedStylesheet) -> dict[str, str]:
        self.chunks = build_chunks(sheet, CHUNK_CATEGORIES)
        return self.chunks

    def generate_analytics(self) -> AnalyticsReport:
        output_dir = Path(self.config.output_dir)
        original = file_size(self.config.source_css)
        optimized = file_size(output_dir / OPTIMIZED_CSS_NAME)
        critical = file_size(output_dir / CRITICAL_CSS_NAME) if self.config.extract_critical else 0

        unused: list[str] = []
        unused_percent = 0.0
        if self.sheet is not None:
            unused = unused_utilities(self.sheet, self.used)
            defined = defined_utilities(self.sheet)
            if defined:
                unused_percent = round(len(unused) / len(defined) * 100, 2)

        violations = check_budgets(self.config.budgets, optimized, critical, unused_percent)
        for violation in violations:
            logger.warning(
                "Budget exceeded: %s=%s (budget %s, %s)",
                violation.type,
                violation.actual,
                violation.budget,
                violation.severity,
            )

        return AnalyticsReport(
            total_utilities=len(self.used),
            critical_utilities=len(self.critical),
            chunks=list(self.chunks),
            unused_utilities=unused,
            size_savings=size_savings(original, optimized),
            recommendations=recommendations(len(self.used), len(self.critical)),
            budget_violations=violations,
        )

    # --- pipeline ---------------------------------------------------------

    def optimize(self) -> AnalyticsReport:
        """Run the whole pipeline and write every artifact.

        Outputs, relative to ``output_dir``: ``index.optimized.css``,
        ``critical.css`` (optional), ``chunks/<name>.css`` (optional),
        ``bundle-analytics.json`` and copies of the JS modules under ``js/``.
        """
        config = self.config
        output_dir = Path(config.output_dir)
        logger.info("Starting build optimization")

        self.copy_js_modules()

        self.analyze_usage()
        logger.info("Found %d used utilities", len(self.used))

        sheet = self.load_stylesheet()

        _ensure_dir(output_dir)
        _write_text(output_dir / OPTIMIZED_CSS_NAME, self.generate_optimized_css(sheet))

        if config.extract_critical:
            _write_text(output_dir / CRITICAL_CSS_NAME, self.extract_critical_css(sheet))

        if config.generate_chunks:
            chunks_dir = output_dir / CHUNKS_DIR_NAME
            _ensure_dir(chunks_dir)
            for name, css in self.create_chunks(sheet).items():
                _write_text(chunks_dir / f"{name}.css", css)

        report = self.generate_analytics()
        analytics_path = output_dir / ANALYTICS_NAME
        _write_text(analytics_path, json.dumps(report.to_dict(), indent=2))

        logger.info("Optimization complete, analytics saved to %s", analytics_path)
        return report

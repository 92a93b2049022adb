"""Bundle analytics: size savings, unused utilities, budgets and advice."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Collection, Iterable

from cssopt.classifier import is_utility_class
from cssopt.config import Budgets
from cssopt.model.rule import CSSRule, ParsedStylesheet
from cssopt.stylesheet.parser import class_selectors

CRITICAL_SPLIT_THRESHOLD = 50
SMALL_BUNDLE_THRESHOLD = 100


def format_kb(size: int) -> str:
    """Format a byte count as kilobytes with two decimals: ``"1.00KB"``."""
    return f"{size / 1024:.2f}KB"


def file_size(path: str | Path) -> int:
    """Size of *path* in bytes, or 0 when it does not exist."""
    path = Path(path)
    if not path.is_file():
        return 0
    return path.stat().st_size


def size_savings(original: int, optimized: int) -> dict[str, str]:
    """Compare two sizes; savings is ``"0%"`` when *original* is empty."""
    if original > 0:
        savings = f"{(original - optimized) / original * 100:.2f}"
    else:
        savings = "0"
    return {
        "originalSize": format_kb(original),
        "optimizedSize": format_kb(optimized),
        "savings": f"{savings}%",
    }


def _iter_plain_rules(rules: Iterable[CSSRule]) -> Iterable[CSSRule]:
    for rule in rules:
        if rule.is_group:
            yield from _iter_plain_rules(rule.children)
        elif rule.at_rule is None:
            yield rule


def defined_utilities(sheet: ParsedStylesheet) -> set[str]:
    """Utility classes that the stylesheet defines a rule for."""
    defined: set[str] = set()
    for rule in _iter_plain_rules(sheet.rules):
        defined.update(name for name in class_selectors(rule.selector) if is_utility_class(name))
    return defined


def unused_utilities(sheet: ParsedStylesheet, used: Collection[str]) -> list[str]:
    """Defined utilities that no scanned source references, sorted."""
    return sorted(defined_utilities(sheet) - set(used))


def recommendations(used_count: int, critical_count: int) -> list[str]:
    advice: list[str] = []
    if critical_count > CRITICAL_SPLIT_THRESHOLD:
        advice.append("Consider splitting critical CSS into smaller chunks")
    if used_count < SMALL_BUNDLE_THRESHOLD:
        advice.append("Bundle size is optimal for current usage")
    return advice


# ---------------------------------------------------------------------------
# Budgets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BudgetViolation:
    """A measured value that exceeded its configured budget."""

    type: str  # "cssSize", "criticalCSS", "unusedCSS"
    actual: float
    budget: float
    severity: str  # "critical", "warning", "info"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "actual": self.actual,
            "budget": self.budget,
            "severity": self.severity,
        }


def budget_severity(actual: float, budget: float) -> str:
    ratio = actual / budget
    if ratio > 2:
        return "critical"
    if ratio > 1.5:
        return "warning"
    return "info"


def check_budgets(
    budgets: Budgets,
    optimized_size: int,
    critical_size: int,
    unused_percent: float,
) -> list[BudgetViolation]:
    """Return a violation for every measurement above its budget."""
    measurements = (
        ("cssSize", optimized_size, budgets.css_size),
        ("criticalCSS", critical_size, budgets.critical_css),
        ("unusedCSS", unused_percent, budgets.unused_css),
    )
    return [
        BudgetViolation(type=name, actual=actual, budget=budget, severity=budget_severity(actual, budget))
        for name, actual, budget in measurements
        if budget > 0 and actual > budget
    ]


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


@dataclass
class AnalyticsReport:
    """Summary of a single optimization run, serialised to JSON."""

    total_utilities: int
    critical_utilities: int
    chunks: list[str]
    unused_utilities: list[str]
    size_savings: dict[str, str]
    recommendations: list[str] = field(default_factory=list)
    budget_violations: list[BudgetViolation] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalUtilities": self.total_utilities,
            "criticalUtilities": self.critical_utilities,
            "chunks": list(self.chunks),
            "unusedUtilities": list(self.unused_utilities),
            "sizeSavings": dict(self.size_savings),
            "recommendations": list(self.recommendations),
            "budgetViolations": [v.to_dict() for v in self.budget_violations],
        }

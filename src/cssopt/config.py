from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_FIXTURES = ("./test-utilities.html", "./demo.html", "./demo-advanced.html")


@dataclass(frozen=True)
class Budgets:
    css_size: int = 50_000  # bytes
    critical_css: int = 14_000  # bytes
    unused_css: float = 20.0  # percent of defined utilities


@dataclass(frozen=True)
class OptimizerConfig:
    source_dir: str = "./src"
    output_dir: str = "./dist"
    source_css: str = "./dist/index.css"
    generate_chunks: bool = True
    extract_critical: bool = True
    js_source_dir: str = "./src/js"
    fixtures: tuple[str, ...] = DEFAULT_FIXTURES
    critical_fixture: str = "./test-utilities.html"
    budgets: Budgets = field(default_factory=Budgets)

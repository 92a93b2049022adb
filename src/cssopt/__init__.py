"""cssopt: build-time tree-shaker and chunker for utility-class stylesheets."""

__version__ = "0.1.0"

from cssopt.config import Budgets, OptimizerConfig
from cssopt.errors import OptimizerError, OutputError, ScanError, StylesheetReadError
from cssopt.optimizer import BuildOptimizer

__all__ = [
    "__version__",
    "BuildOptimizer",
    "Budgets",
    "OptimizerConfig",
    "OptimizerError",
    "OutputError",
    "ScanError",
    "StylesheetReadError",
]

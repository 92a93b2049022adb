from cssopt.scanner.scanner import (
    SOURCE_EXTENSIONS,
    UsageScanner,
    extract_utilities,
    iter_source_files,
)

__all__ = ["SOURCE_EXTENSIONS", "UsageScanner", "extract_utilities", "iter_source_files"]

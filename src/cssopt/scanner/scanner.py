"""Usage scanner: collects utility classes referenced by source files."""

from __future__ import annotations

import logging
import re
import stat
from pathlib import Path
from typing import Iterable, Iterator

from cssopt.classifier import is_utility_class
from cssopt.errors import ScanError

__all__ = [
    "SOURCE_EXTENSIONS",
    "UsageScanner",
    "extract_utilities",
    "iter_source_files",
]

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = (".html", ".js", ".jsx", ".ts", ".tsx", ".vue", ".svelte")
SKIPPED_DIRS = frozenset({"node_modules"})

# class="..." / className='...'
_CLASS_ATTR_RE = re.compile(r"""(?:class|className)=["']([^"']+)["']""")
# Svelte-style class:name bindings
_CLASS_BINDING_RE = re.compile(r"class:([a-zA-Z0-9\-_]+)")


def extract_utilities(text: str) -> set[str]:
    """Return the utility classes referenced in *text*."""
    found: set[str] = set()
    for match in _CLASS_ATTR_RE.finditer(text):
        found.update(cls for cls in match.group(1).split() if is_utility_class(cls))
    for match in _CLASS_BINDING_RE.finditer(text):
        if is_utility_class(match.group(1)):
            found.add(match.group(1))
    return found


def iter_source_files(
    root: str | Path, extensions: Iterable[str] = SOURCE_EXTENSIONS
) -> Iterator[Path]:
    """Yield files under *root* whose name ends with one of *extensions*.

    Hidden directories and ``node_modules`` are not entered.  Entries are
    visited in sorted order.  Any OS failure raises :class:`ScanError`
    naming the path that could not be read.
    """
    suffixes = tuple(extensions)
    root = Path(root)
    try:
        found = root.is_dir()
    except OSError as exc:
        raise ScanError(f"Cannot access directory: {exc.strerror or exc}", path=root) from exc
    if not found:
        raise ScanError("Source directory not found", path=root)

    def walk(directory: Path) -> Iterator[Path]:
        try:
            entries = sorted(directory.iterdir())
        except OSError as exc:
            raise ScanError(f"Cannot list directory: {exc.strerror or exc}", path=directory) from exc
        for entry in entries:
            try:
                mode = entry.stat().st_mode
            except OSError as exc:
                raise ScanError(f"Cannot stat entry: {exc.strerror or exc}", path=entry) from exc
            if stat.S_ISDIR(mode):
                if entry.name.startswith(".") or entry.name in SKIPPED_DIRS:
                    continue
                yield from walk(entry)
            elif stat.S_ISREG(mode) and entry.name.endswith(suffixes):
                yield entry

    yield from walk(root)


class UsageScanner:
    """Accumulates the set of utility classes used across a project."""

    def __init__(self, extensions: Iterable[str] = SOURCE_EXTENSIONS) -> None:
        self.extensions = tuple(extensions)
        self.used: set[str] = set()

    def scan_text(self, text: str) -> set[str]:
        found = extract_utilities(text)
        self.used |= found
        return found

    def scan_file(self, path: str | Path) -> set[str]:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise ScanError(f"Cannot read file: {exc.strerror or exc}", path=path) from exc
        found = self.scan_text(text)
        logger.debug("Scanned %s: %d utilities", path, len(found))
        return found

    def scan_directory(self, root: str | Path) -> set[str]:
        """Scan every source file under *root*; returns the running set."""
        for path in iter_source_files(root, self.extensions):
            self.scan_file(path)
        return self.used

    def scan_fixtures(self, paths: Iterable[str | Path]) -> set[str]:
        """Scan auxiliary fixture files, skipping any that do not exist."""
        for path in paths:
            if Path(path).is_file():
                self.scan_file(path)
            else:
                logger.debug("Fixture %s not present, skipped", path)
        return self.used

    def analyze(
        self, source_dir: str | Path, fixtures: Iterable[str | Path] = ()
    ) -> set[str]:
        """Scan *source_dir* and then *fixtures*; returns the used classes."""
        self.scan_directory(source_dir)
        self.scan_fixtures(fixtures)
        return self.used

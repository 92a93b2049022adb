"""Hand-written tokenizer that splits a stylesheet into rule blocks.

The tokenizer tracks brace depth and skips braces that appear inside
comments or strings or are escaped with a backslash.  Group at-rules
(``@media``, ``@supports`` ...) are split one level further into child
rules; every other block is kept as a single opaque unit.  Plain rule
bodies are expected to be flat: a nested block inside one is preserved
verbatim and reported as a warning.

Example:
    @import "base.css";
    :root { --brand: #3b82f6; }
    .flex { display: flex; }
    @media (min-width: 768px) { .md\\:p-4 { padding: 1rem; } }
"""

from __future__ import annotations

import re

from cssopt.model.diagnostic import Diagnostic, Severity
from cssopt.model.rule import GROUP_AT_RULES, CSSRule, ParsedStylesheet

__all__ = ["class_selectors", "parse_stylesheet"]

_AT_NAME_RE = re.compile(r"@(-?[A-Za-z][\w-]*)")
_COMMENT_RE = re.compile(r"/\*.*?(?:\*/|$)", re.DOTALL)
_STRING_RE = re.compile(r"""(?<!\\)"(?:\\.|[^"\\])*"|(?<!\\)'(?:\\.|[^'\\])*'""")
_ATTRIBUTE_RE = re.compile(r"(?<!\\)\[(?:\\.|[^\]\\])*\]")

# A class selector: dot, then an identifier that may contain escapes
# (``.md\:flex``, ``.w-1\/2``).  An unescaped ``:`` ends the name.
_CLASS_RE = re.compile(r"\.(-?(?:[A-Za-z_]|\\.)(?:[\w-]|\\.)*)")
_ESCAPE_RE = re.compile(r"\\(.)")


def class_selectors(selector: str) -> list[str]:
    """Return the class names referenced by *selector*, in order.

    Escapes are resolved and pseudo-class suffixes dropped, so
    ``.hover\\:bg-red:hover`` yields ``["hover:bg-red"]``.  Dots inside
    strings and attribute selectors are ignored.
    """
    cleaned = _COMMENT_RE.sub(" ", selector)
    cleaned = _STRING_RE.sub('""', cleaned)
    cleaned = _ATTRIBUTE_RE.sub("[]", cleaned)
    return [_ESCAPE_RE.sub(r"\1", m.group(1)) for m in _CLASS_RE.finditer(cleaned)]


class _Tokenizer:
    def __init__(self, source: str) -> None:
        self.source = source
        self.diagnostics: list[Diagnostic] = []

    # --- helpers ----------------------------------------------------------

    def _line(self, index: int) -> int:
        return self.source.count("\n", 0, index) + 1

    def _report(self, rule: str, severity: Severity, message: str, index: int) -> None:
        self.diagnostics.append(
            Diagnostic(rule=rule, severity=severity, message=message, line=self._line(index))
        )

    def _skip_comment(self, index: int) -> int:
        end = self.source.find("*/", index + 2)
        if end == -1:
            self._report(
                "unterminated_comment",
                Severity.WARNING,
                "Comment is never closed; the rest of the stylesheet is ignored.",
                index,
            )
            return len(self.source)
        return end + 2

    def _skip_string(self, index: int) -> int:
        quote = self.source[index]
        i = index + 1
        n = len(self.source)
        while i < n:
            ch = self.source[i]
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                return i + 1
            if ch == "\n":
                # CSS strings cannot span lines; an unclosed one ends here.
                return i
            i += 1
        return n

    def _block_end(self, open_index: int) -> tuple[int, bool, bool]:
        """Find the end of the block opened at *open_index*.

        Returns ``(end, closed, nested)`` where *end* is the index just past
        the matching ``}`` (or the end of input when unclosed).
        """
        source = self.source
        n = len(source)
        depth = 1
        nested = False
        i = open_index + 1
        while i < n:
            ch = source[i]
            if ch == "/" and source.startswith("/*", i):
                i = self._skip_comment(i)
                continue
            if ch == "\\":
                i += 2
                continue
            if ch in "\"'":
                i = self._skip_string(i)
                continue
            if ch == "{":
                depth += 1
                nested = True
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return i + 1, True, nested
            i += 1
        return n, False, nested

    # --- items ------------------------------------------------------------

    def _build_rule(
        self, segment_start: int, open_index: int, end: int, closed: bool, nested: bool
    ) -> CSSRule:
        prelude = _COMMENT_RE.sub("", self.source[segment_start:open_index]).strip()
        text = self.source[segment_start:end].strip()

        if not closed:
            self._report(
                "unclosed_block",
                Severity.ERROR,
                f"Block '{prelude}' is never closed.",
                open_index,
            )
        if not prelude:
            self._report(
                "missing_selector",
                Severity.WARNING,
                "Block has no selector.",
                open_index,
            )

        at_match = _AT_NAME_RE.match(prelude)
        if at_match:
            name = at_match.group(1).lower()
            children: tuple[CSSRule, ...] = ()
            if name in GROUP_AT_RULES:
                body_end = end - 1 if closed else end
                children = tuple(self.parse_items(open_index + 1, body_end)[0])
            return CSSRule(selector=prelude, text=text, at_rule=name, children=children)

        if nested:
            self._report(
                "nested_block",
                Severity.WARNING,
                f"Rule '{prelude}' contains a nested block; it is kept as one unit.",
                open_index,
            )
        elif closed and not _COMMENT_RE.sub("", self.source[open_index + 1:end - 1]).strip():
            self._report(
                "empty_block",
                Severity.INFO,
                f"Rule '{prelude}' has no declarations.",
                open_index,
            )
        return CSSRule(selector=prelude, text=text)

    def parse_items(self, start: int, end: int) -> tuple[list[CSSRule], list[str]]:
        """Split ``source[start:end]`` into rules and bare text fragments."""
        source = self.source
        rules: list[CSSRule] = []
        bare: list[str] = []
        segment_start = start
        i = start
        while i < end:
            ch = source[i]
            if ch == "/" and source.startswith("/*", i):
                after = min(self._skip_comment(i), end)
                if not source[segment_start:i].strip():
                    bare.append(source[i:after])
                    segment_start = after
                i = after
                continue
            if ch == "\\":
                i = min(i + 2, end)
                continue
            if ch in "\"'":
                i = min(self._skip_string(i), end)
                continue
            if ch == ";":
                bare.append(source[segment_start:i + 1])
                i += 1
                segment_start = i
                continue
            if ch == "}":
                self._report(
                    "unmatched_brace",
                    Severity.ERROR,
                    "Closing brace has no matching opening brace.",
                    i,
                )
                bare.append(source[segment_start:i])
                i += 1
                segment_start = i
                continue
            if ch == "{":
                block_end, closed, nested = self._block_end(i)
                block_end = min(block_end, end)
                rules.append(self._build_rule(segment_start, i, block_end, closed, nested))
                i = block_end
                segment_start = i
                continue
            i += 1
        bare.append(source[segment_start:end])
        return rules, bare


def parse_stylesheet(source: str) -> ParsedStylesheet:
    """Parse stylesheet text into rules (in source order) and a preamble.

    The preamble is the newline-joined, trimmed text of everything that is
    not a block: ``@import``/``@charset`` statements, top-level comments and
    stray text.  Problems with the input are returned as diagnostics rather
    than raised.
    """
    tokenizer = _Tokenizer(source)
    rules, bare = tokenizer.parse_items(0, len(source))
    preamble = "\n".join(part.strip() for part in bare if part.strip())
    # Group bodies are walked twice, so a problem inside one can be seen twice.
    diagnostics = list(dict.fromkeys(tokenizer.diagnostics))
    return ParsedStylesheet(rules=rules, preamble=preamble, diagnostics=diagnostics)

"""Rule filters: usage-based tree-shaking, critical CSS, and category chunks.

All three walk the same parsed rule list and differ only in the predicate
used to keep a rule.  Kept rules are emitted as their original text, in
source order, joined by newlines.  Group at-rules are filtered through
their children and dropped when none survive.
"""

from __future__ import annotations

from typing import Callable, Collection, Iterable

from cssopt.model.rule import CSSRule, ParsedStylesheet
from cssopt.stylesheet.parser import class_selectors

__all__ = [
    "BASE_STYLE_MARKERS",
    "CHUNK_CATEGORIES",
    "build_chunks",
    "chunk_css",
    "critical_css",
    "filter_rules",
    "optimize_css",
]

Predicate = Callable[[CSSRule], bool]

BASE_STYLE_MARKERS = (":root", "*", "html", "body")

CHUNK_CATEGORIES: dict[str, tuple[str, ...]] = {
    "layout": ("flex", "grid", "block", "inline", "hidden", "relative", "absolute", "fixed", "sticky"),
    "spacing": ("p-", "m-", "px-", "py-", "mx-", "my-", "space-", "gap-"),
    "typography": ("text-", "font-", "leading-", "tracking-", "uppercase", "lowercase", "capitalize"),
    "colors": ("bg-", "text-", "border-", "ring-", "divide-"),
    "borders": ("border", "rounded", "ring-", "divide-"),
    "effects": ("shadow", "opacity-", "blur-", "brightness-", "contrast-"),
    "animations": ("transition", "transform", "animate-", "duration-", "ease-"),
}


def _rule_classes(rule: CSSRule) -> list[str]:
    if rule.at_rule is not None:
        return []
    return class_selectors(rule.selector)


def filter_rules(rules: Iterable[CSSRule], keep: Predicate) -> list[CSSRule]:
    """Return the rules accepted by *keep*, preserving order.

    Group at-rules are never passed to *keep* themselves; their children
    are filtered instead.
    """
    kept: list[CSSRule] = []
    for rule in rules:
        if rule.is_group:
            children = filter_rules(rule.children, keep)
            if children:
                kept.append(rule.with_children(children))
        elif keep(rule):
            kept.append(rule)
    return kept


def _render(rules: list[CSSRule], preamble: str = "") -> str:
    parts = [preamble] if preamble else []
    parts.extend(rule.text for rule in rules)
    return "\n".join(parts)


def optimize_css(sheet: ParsedStylesheet, used: Collection[str]) -> str:
    """Keep rules that reference a used class, or no class at all."""

    def keep(rule: CSSRule) -> bool:
        classes = _rule_classes(rule)
        if not classes:
            return True
        return any(name in used for name in classes)

    return _render(filter_rules(sheet.rules, keep), sheet.preamble)


def critical_css(sheet: ParsedStylesheet, critical: Collection[str]) -> str:
    """Keep rules for critical classes plus base styles.

    A rule without class selectors is critical when its selector mentions
    ``:root``, ``*``, ``html`` or ``body``.
    """

    def keep(rule: CSSRule) -> bool:
        classes = _rule_classes(rule)
        if classes:
            return any(name in critical for name in classes)
        return any(marker in rule.selector for marker in BASE_STYLE_MARKERS)

    return _render(filter_rules(sheet.rules, keep), sheet.preamble)


def _matches_prefix(name: str, prefixes: Iterable[str]) -> bool:
    return any(
        name.startswith(prefix) or name == prefix.replace("-", "", 1)
        for prefix in prefixes
    )


def chunk_css(sheet: ParsedStylesheet, prefixes: Iterable[str]) -> str:
    """Keep rules with a class selector in the category named by *prefixes*.

    Rules without class selectors never belong to a chunk, and the
    preamble is not included.
    """
    prefixes = tuple(prefixes)

    def keep(rule: CSSRule) -> bool:
        return any(_matches_prefix(name, prefixes) for name in _rule_classes(rule))

    return _render(filter_rules(sheet.rules, keep))


def build_chunks(
    sheet: ParsedStylesheet,
    categories: dict[str, tuple[str, ...]] | None = None,
) -> dict[str, str]:
    """Return ``{chunk name: css}`` for every category, in category order."""
    categories = CHUNK_CATEGORIES if categories is None else categories
    return {name: chunk_css(sheet, prefixes) for name, prefixes in categories.items()}

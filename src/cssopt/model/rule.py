"""Stylesheet model: CSSRule and ParsedStylesheet dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

from cssopt.model.diagnostic import Diagnostic

# At-rules whose body is a list of ordinary rules.
GROUP_AT_RULES = frozenset({"media", "supports", "layer", "container", "document"})


@dataclass(frozen=True)
class CSSRule:
    """One top-level (or group-nested) block of a stylesheet.

    ``text`` is the verbatim source of the block, whitespace-trimmed.  For a
    plain rule ``selector`` is the prelude before ``{``.  For an at-rule
    ``at_rule`` holds its lowercase name (``"media"``, ``"keyframes"``) and
    ``selector`` the full prelude.  Only group at-rules carry ``children``.
    """

    selector: str
    text: str
    at_rule: str | None = None
    children: tuple[CSSRule, ...] = ()

    @property
    def is_group(self) -> bool:
        return self.at_rule in GROUP_AT_RULES

    def with_children(self, children: list[CSSRule]) -> CSSRule:
        """Rebuild a group at-rule around a subset of its children.

        When every child is kept the original text is returned untouched.
        Otherwise the body is regenerated from the kept children alone, so
        comments and bare statements inside the group are not carried over.
        """
        if len(children) == len(self.children):
            return self
        body = "\n".join(child.text for child in children)
        return CSSRule(
            selector=self.selector,
            text=f"{self.selector} {{\n{body}\n}}",
            at_rule=self.at_rule,
            children=tuple(children),
        )


@dataclass(frozen=True)
class ParsedStylesheet:
    """Rules in source order plus everything that was not a block."""

    rules: list[CSSRule]
    preamble: str = ""
    diagnostics: list[Diagnostic] = field(default_factory=list)

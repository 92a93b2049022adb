"""Tests for the stylesheet tokenizer."""

import pytest

from cssopt.model import CSSRule, Severity
from cssopt.stylesheet import class_selectors, parse_stylesheet

SAMPLE = ":root{--x:1}\n.flex{display:flex}\n.unused-xyz{color:red}\n.p-4{padding:1rem}"


# ---------------------------------------------------------------------------
# Plain rules
# ---------------------------------------------------------------------------


class TestPlainRules:
    def test_rules_in_source_order(self):
        sheet = parse_stylesheet(SAMPLE)
        assert [r.selector for r in sheet.rules] == [":root", ".flex", ".unused-xyz", ".p-4"]
        assert sheet.rules[1].text == ".flex{display:flex}"
        assert sheet.preamble == ""
        assert sheet.diagnostics == []

    def test_multiline_rule_text_is_verbatim(self):
        source = ".card {\n  padding: 1rem;\n  color: red;\n}\n"
        sheet = parse_stylesheet(source)
        assert sheet.rules == [
            CSSRule(selector=".card", text=".card {\n  padding: 1rem;\n  color: red;\n}")
        ]

    def test_braces_inside_strings(self):
        sheet = parse_stylesheet('.q::before { content: "}"; }\n.flex { display: flex; }')
        assert [r.selector for r in sheet.rules] == [".q::before", ".flex"]
        assert sheet.diagnostics == []

    def test_braces_inside_comments(self):
        sheet = parse_stylesheet(".a { /* } */ color: red; }\n.b { color: blue; }")
        assert [r.selector for r in sheet.rules] == [".a", ".b"]


# ---------------------------------------------------------------------------
# Preamble
# ---------------------------------------------------------------------------


class TestPreamble:
    def test_imports_and_comments(self):
        source = '@charset "utf-8";\n/* base */\n@import url("reset.css");\n.flex{display:flex}'
        sheet = parse_stylesheet(source)
        assert sheet.preamble == '@charset "utf-8";\n/* base */\n@import url("reset.css");'
        assert [r.selector for r in sheet.rules] == [".flex"]

    def test_comment_before_rule_is_not_part_of_selector(self):
        sheet = parse_stylesheet("/* layout */\n.flex { display: flex; }")
        assert sheet.rules[0].selector == ".flex"
        assert sheet.rules[0].text == ".flex { display: flex; }"


# ---------------------------------------------------------------------------
# At-rules
# ---------------------------------------------------------------------------


class TestAtRules:
    def test_media_block_has_children(self):
        source = "@media (min-width: 768px) {\n  .md\\:flex { display: flex; }\n  .p-4 { padding: 1rem; }\n}"
        sheet = parse_stylesheet(source)
        assert len(sheet.rules) == 1
        media = sheet.rules[0]
        assert media.at_rule == "media"
        assert media.is_group
        assert media.selector == "@media (min-width: 768px)"
        assert [c.selector for c in media.children] == [".md\\:flex", ".p-4"]
        assert media.text == source
        assert sheet.diagnostics == []

    def test_keyframes_is_opaque(self):
        source = "@keyframes spin { from { transform: rotate(0) } to { transform: rotate(360deg) } }"
        sheet = parse_stylesheet(source)
        rule = sheet.rules[0]
        assert rule.at_rule == "keyframes"
        assert not rule.is_group
        assert rule.children == ()
        assert sheet.diagnostics == []

    def test_rule_after_media_is_not_corrupted(self):
        source = "@media print { .a { color: red; } }\n.flex { display: flex; }"
        sheet = parse_stylesheet(source)
        assert [r.selector for r in sheet.rules] == ["@media print", ".flex"]
        assert sheet.rules[1].text == ".flex { display: flex; }"


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


class TestDiagnostics:
    def test_unmatched_closing_brace(self):
        sheet = parse_stylesheet(".a { color: red; }\n}\n.b { color: blue; }")
        assert [r.selector for r in sheet.rules] == [".a", ".b"]
        assert len(sheet.diagnostics) == 1
        diag = sheet.diagnostics[0]
        assert diag.rule == "unmatched_brace"
        assert diag.severity is Severity.ERROR
        assert diag.line == 2

    def test_unclosed_block(self):
        sheet = parse_stylesheet(".a { color: red; }\n.b { color: blue;")
        assert [r.selector for r in sheet.rules] == [".a", ".b"]
        assert [d.rule for d in sheet.diagnostics] == ["unclosed_block"]
        assert sheet.diagnostics[0].is_error

    def test_nested_block_in_plain_rule(self):
        sheet = parse_stylesheet(".card { color: red; &:hover { color: blue; } }")
        assert len(sheet.rules) == 1
        assert [d.rule for d in sheet.diagnostics] == ["nested_block"]
        assert sheet.diagnostics[0].is_warning

    def test_missing_selector(self):
        sheet = parse_stylesheet("{ color: red; }")
        assert [d.rule for d in sheet.diagnostics] == ["missing_selector"]

    def test_diagnostic_str(self):
        sheet = parse_stylesheet("}")
        assert str(sheet.diagnostics[0]) == (
            "ERROR [line=1]: Closing brace has no matching opening brace."
        )


# ---------------------------------------------------------------------------
# Class selectors
# ---------------------------------------------------------------------------


class TestClassSelectors:
    @pytest.mark.parametrize(
        "selector, expected",
        [
            (".flex", ["flex"]),
            (".flex:hover", ["flex"]),
            (".group:hover .p-4", ["group", "p-4"]),
            (".a, .b > .c", ["a", "b", "c"]),
            (".md\\:flex", ["md:flex"]),
            (".w-1\\/2", ["w-1/2"]),
            (".hover\\:bg-red:hover", ["hover:bg-red"]),
            ("html", []),
            (":root", []),
            ("*", []),
            ('a[href$=".pdf"]', []),
            ("div.card", ["card"]),
        ],
    )
    def test_extraction(self, selector, expected):
        assert class_selectors(selector) == expected


# ---------------------------------------------------------------------------
# Backslash escapes outside strings
# ---------------------------------------------------------------------------


class TestEscapes:
    def test_escaped_quotes_in_selector(self):
        source = r".content-\[\'x\'\]{content:'x'}.flex{display:flex}.unused-a{color:red}"
        sheet = parse_stylesheet(source)
        assert [r.selector for r in sheet.rules] == [
            r".content-\[\'x\'\]",
            ".flex",
            ".unused-a",
        ]
        assert sheet.preamble == ""
        assert sheet.diagnostics == []
        assert class_selectors(sheet.rules[0].selector) == ["content-['x']"]

    def test_escaped_double_quote_in_selector(self):
        sheet = parse_stylesheet(r'.q\"a{color:red}.flex{display:flex}')
        assert [r.selector for r in sheet.rules] == [r'.q\"a', ".flex"]
        assert class_selectors(sheet.rules[0].selector) == ['q"a']

    def test_escaped_open_brace_in_selector(self):
        sheet = parse_stylesheet(".a\\{b{color:red}\n.flex{display:flex}")
        assert [r.selector for r in sheet.rules] == [".a\\{b", ".flex"]
        assert class_selectors(sheet.rules[0].selector) == ["a{b"]
        assert sheet.diagnostics == []

    def test_escaped_close_brace_in_selector(self):
        sheet = parse_stylesheet(".a\\}b{color:red}\n.flex{display:flex}")
        assert [r.selector for r in sheet.rules] == [".a\\}b", ".flex"]
        assert sheet.diagnostics == []

    def test_escaped_brace_inside_body(self):
        sheet = parse_stylesheet(".a{content:\\}}\n.flex{display:flex}")
        assert [r.selector for r in sheet.rules] == [".a", ".flex"]
        assert sheet.diagnostics == []


# ---------------------------------------------------------------------------
# Empty rules and group rebuilding
# ---------------------------------------------------------------------------


class TestEmptyBlock:
    def test_empty_rule_is_info(self):
        sheet = parse_stylesheet(".flex{ /* todo */ }\n.p-4{padding:1rem}")
        assert [d.rule for d in sheet.diagnostics] == ["empty_block"]
        assert sheet.diagnostics[0].severity is Severity.INFO
        assert sheet.diagnostics[0].line == 1


class TestGroupRebuild:
    SOURCE = "@media print {\n/* print only */\n.flex{display:none}\n.grid{display:none}\n}"

    def test_all_children_kept_is_verbatim(self):
        media = parse_stylesheet(self.SOURCE).rules[0]
        assert media.with_children(list(media.children)) is media
        assert "/* print only */" in media.text

    def test_rebuilt_group_holds_only_kept_children(self):
        media = parse_stylesheet(self.SOURCE).rules[0]
        rebuilt = media.with_children([media.children[0]])
        assert rebuilt.text == "@media print {\n.flex{display:none}\n}"

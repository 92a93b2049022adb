from cssopt.model.diagnostic import Diagnostic, Severity
from cssopt.model.rule import GROUP_AT_RULES, CSSRule, ParsedStylesheet

__all__ = ["GROUP_AT_RULES", "CSSRule", "Diagnostic", "ParsedStylesheet", "Severity"]

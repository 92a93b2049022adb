from cssopt.stylesheet.parser import class_selectors, parse_stylesheet

__all__ = ["class_selectors", "parse_stylesheet"]

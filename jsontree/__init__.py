"""Parse, build, edit, compare, print and minify JSON document trees."""

__version__ = "1.5.5"
__all__ = ["node", "parser", "printer", "minify"]
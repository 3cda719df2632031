"""A small front end for a C subset: lexer, parse-tree printer and semantic checker."""

__version__ = "0.1.0"
__all__ = ["lexer", "parser", "semantic"]
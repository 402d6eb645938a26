"""Parsing module for compact value strings."""

from icarus_tables.parsing.value_lexer import ValueLexer
from icarus_tables.parsing.value_parser import ValueParser, get_value_parser

__all__ = [
    "ValueLexer",
    "ValueParser",
    "get_value_parser",
]

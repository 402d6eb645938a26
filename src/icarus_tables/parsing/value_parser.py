"""Parser for compact property-list value strings.

Unreal exports struct values that appear as dictionary keys, or in other
places where only a string fits, as a parenthesized property list:

    (RowName="Wood",DataTableName="D_ItemsStatic")
    (Value="Stamina")

The grammar is deliberately forgiving: the parentheses are optional, a
missing closing parenthesis is accepted, and entries that are not
``key=value`` pairs are skipped.
"""

from __future__ import annotations

from typing import Any

import ply.yacc as yacc

from icarus_tables.parsing.value_lexer import ValueLexer


class ValueParser:
    """Parser for property lists, producing ordered ``(key, value)`` pairs."""

    tokens = ValueLexer.tokens

    def __init__(self) -> None:
        self.lexer = ValueLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_property_list_wrapped(self, p: yacc.YaccProduction) -> None:
        """property_list : LPAREN entry_list RPAREN
                         | LPAREN entry_list"""
        p[0] = p[2]

    def p_property_list_bare(self, p: yacc.YaccProduction) -> None:
        """property_list : entry_list"""
        p[0] = p[1]

    def p_entry_list_single(self, p: yacc.YaccProduction) -> None:
        """entry_list : entry"""
        p[0] = [p[1]] if p[1] is not None else []

    def p_entry_list_multiple(self, p: yacc.YaccProduction) -> None:
        """entry_list : entry_list COMMA entry"""
        p[0] = p[1]
        if p[3] is not None:
            p[0].append(p[3])

    def p_entry_pair(self, p: yacc.YaccProduction) -> None:
        """entry : WORD EQUALS value"""
        p[0] = (p[1], p[3])

    def p_entry_pair_empty(self, p: yacc.YaccProduction) -> None:
        """entry : WORD EQUALS"""
        p[0] = (p[1], "")

    def p_entry_bare(self, p: yacc.YaccProduction) -> None:
        """entry : value"""
        p[0] = None

    def p_entry_empty(self, p: yacc.YaccProduction) -> None:
        """entry :"""
        p[0] = None

    def p_value(self, p: yacc.YaccProduction) -> None:
        """value : WORD
                 | STRING"""
        p[0] = p[1]

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> list[tuple[str, str]]:
        """Parse a property list and return its ``key=value`` entries in order.

        Raises:
            SyntaxError: If the text cannot be tokenized or parsed.
        """
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        entries = self.parser.parse(data, lexer=self.lexer.lexer)
        if entries is None:
            return []
        return entries

    def parse_dict(self, data: str) -> dict[str, str]:
        """Parse a property list into a dict; later duplicate keys win."""
        return dict(self.parse(data))


_parser: ValueParser | None = None


def get_value_parser() -> ValueParser:
    """Return the shared parser, building its tables on first use."""
    global _parser
    if _parser is None:
        _parser = ValueParser()
        _parser.build(debug=False, write_tables=False)
    return _parser

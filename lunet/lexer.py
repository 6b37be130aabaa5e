"""Lexer for the Lunet language.

The scanner reads the source one character at a time and dispatches on
the first character of each token:

* digits start a number literal,
* letters start an identifier or keyword (looked up in a trie),
* quotes start a string literal,
* anything that begins a known operator is matched against the operator
  trie, taking the longest match.

Routines that read one character too far hand it back through a small
LIFO pushback buffer. Pushing a character back also restores the position
it was read at, so every token is stamped with the line and column of its
last character.

The first lexical error aborts scanning.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from .errors import InvalidCharacter, LunetError, UnexpectedToken, UnknownEscape, UnknownSymbol
from .tokens import (
    KEYWORD_LITERALS, KeywordTokens, LiteralKind, LiteralToken, SymbolTokens, Token, TokenType,
)

# Returned by next_char() once the input is exhausted
EOF = ''

ESCAPES = {
    '\\': '\\',
    'n': '\n',
    't': '\t',
    "'": "'",
    '"': '"',
}

# Escaped characters that are dropped from the string (line continuation)
ELIDED_ESCAPES = {'\n', ' '}


class Scanner:
    def __init__(self, code: str):
        self.code = code
        self.curr = 0
        self.line = 1
        self.column = 0
        self.put_backs: List[Tuple[str, Tuple[int, int], Tuple[int, int]]] = []
        self.tokens: Optional[List[Token]] = None
        self._last: Optional[Tuple[str, Tuple[int, int], Tuple[int, int]]] = None

    def scan_tokens(self) -> List[Token]:
        """Scan the whole input. The result ends with an EOF token."""
        if self.tokens is not None:
            return self.tokens
        tokens: List[Token] = []
        while True:
            token = self.scan_next()
            tokens.append(token)
            if token.type is TokenType.EOF:
                break
        self.tokens = tokens
        return tokens

    # Character stream

    def next_char(self) -> str:
        if self.put_backs:
            entry = self.put_backs.pop()
            c, _, after = entry
            self.line, self.column = after
            self._last = entry
            return c
        before = (self.line, self.column)
        if self.curr >= len(self.code):
            self._last = (EOF, before, before)
            return EOF
        c = self.code[self.curr]
        self.curr += 1
        self.column += 1
        if c == '\n':
            self.line += 1
            self.column = 0
        self._last = (c, before, (self.line, self.column))
        return c

    def put_back(self, c: str) -> None:
        """Return the most recently read character `c` to the stream."""
        if self._last is None or self._last[0] != c:
            raise ValueError(f"can only put back the last character read, not {c!r}")
        self.put_backs.append(self._last)
        self.line, self.column = self._last[1]
        self._last = None

    def wrap_error(self, error: LunetError) -> LunetError:
        return error.at(self.line, self.column)

    def skip_whitespace(self) -> None:
        while True:
            c = self.next_char()
            if c == EOF:
                return
            if not c.isspace():
                self.put_back(c)
                return

    # Token routines

    def scan_next(self) -> Token:
        self.skip_whitespace()
        c = self.next_char()
        if c == EOF:
            return Token(TokenType.EOF, self.line, self.column)
        if '0' <= c <= '9':
            return self.scan_number_literal(c)
        if is_ascii_letter(c):
            return self.scan_identifier(c)
        if c in ('"', "'"):
            return self.scan_string_literal(c)
        if SymbolTokens.child(c) is not None:
            return self.scan_symbol_token(c)
        raise self.wrap_error(UnknownSymbol(c))

    def scan_number_literal(self, c: str) -> LiteralToken:
        value = 0
        decimal = -1
        i = 0
        while c == '.' or '0' <= c <= '9':
            if c == '.':
                if decimal > -1:
                    raise self.wrap_error(InvalidCharacter('.'))
                decimal = i
            else:
                value = value * 10 + int(c)
            c = self.next_char()
            i += 1
        self.put_back(c)
        try:
            if decimal > -1:
                number = value / 10 ** (i - decimal - 1)
            else:
                number = float(value)
        except OverflowError:
            number = math.inf
        return LiteralToken(TokenType.LITERAL, self.line, self.column, number, LiteralKind.NUMBER)

    def scan_identifier(self, c: str) -> Token:
        chars = [c]
        node = KeywordTokens.child(c)
        while True:
            c = self.next_char()
            if not (is_ascii_letter(c) or '0' <= c <= '9' or c == '_'):
                self.put_back(c)
                break
            chars.append(c)
            if node is not None:
                node = node.child(c)
        if node is not None and node.value is not None:
            keyword: TokenType = node.value
            if keyword in KEYWORD_LITERALS:
                kind, value = KEYWORD_LITERALS[keyword]
                return LiteralToken(TokenType.LITERAL, self.line, self.column, value, kind)
            return Token(keyword, self.line, self.column)
        return LiteralToken(TokenType.LITERAL, self.line, self.column, ''.join(chars), LiteralKind.IDENTIFIER)

    def scan_string_literal(self, quote: str) -> LiteralToken:
        chars: List[str] = []
        while True:
            c = self.next_char()
            if c == EOF:
                raise self.wrap_error(UnexpectedToken(TokenType.EOF.value, [quote]))
            if c == quote:
                break
            if c != '\\':
                chars.append(c)
                continue
            escaped = self.next_char()
            if escaped == EOF:
                raise self.wrap_error(UnexpectedToken(TokenType.EOF.value, [quote]))
            if escaped in ELIDED_ESCAPES:
                continue
            if escaped not in ESCAPES:
                raise self.wrap_error(UnknownEscape(escaped))
            chars.append(ESCAPES[escaped])
        return LiteralToken(TokenType.LITERAL, self.line, self.column, ''.join(chars), LiteralKind.STRING)

    def scan_symbol_token(self, c: str) -> Token:
        node = SymbolTokens.child(c)
        seen = c
        if node is None:
            raise self.wrap_error(UnknownSymbol(seen))
        last_value: Optional[TokenType] = node.value
        # Position of the last character that completed a token
        last_pos = (self.line, self.column)
        while True:
            c = self.next_char()
            child = node.child(c) if c != EOF else None
            if child is None:
                self.put_back(c)
                break
            seen += c
            node = child
            if node.value is not None:
                last_value = node.value
                last_pos = (self.line, self.column)
        if last_value is None:
            raise self.wrap_error(UnknownSymbol(seen))
        return Token(last_value, *last_pos)


def is_ascii_letter(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z')


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with EOF."""
    return Scanner(source).scan_tokens()

"""Token definitions and the keyword/operator tables used by the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Tuple

from .trie import build_trie


class TokenType(Enum):
    LITERAL = 'Literal'
    EOF = 'EOF'

    # Punctuation and operators
    SEMICOLON = ';'
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    COMMA = ','
    PLUS = '+'
    MINUS = '-'
    ASTERISK = '*'
    ASTERISK2 = '**'
    SLASH = '/'
    EQUAL = '='
    EQUAL_EQUAL = '=='
    BANG_EQUAL = '!='
    LESS = '<'
    LESS_EQUAL = '<='
    GREATER = '>'
    GREATER_EQUAL = '>='

    # Keywords
    VAR = 'var'
    CONST = 'const'
    BLOCK = 'block'
    END = 'end'
    IF = 'if'
    THEN = 'then'
    ELSEIF = 'elseif'
    ELSE = 'else'
    WHILE = 'while'
    DO = 'do'
    REPEAT = 'repeat'
    UNTIL = 'until'
    BREAK = 'break'
    CONTINUE = 'continue'
    AND = 'and'
    OR = 'or'
    NOT = 'not'
    TRUE = 'true'
    FALSE = 'false'
    NIL = 'nil'


class LiteralKind(Enum):
    NUMBER = 'Number'
    STRING = 'String'
    BOOLEAN = 'Boolean'
    IDENTIFIER = 'Identifier'
    NIL = 'Nil'


@dataclass(frozen=True)
class Token:
    type: TokenType
    line: int
    column: int
    value: Any = None

    def describe(self) -> str:
        return self.type.value


@dataclass(frozen=True)
class LiteralToken(Token):
    literal_kind: LiteralKind = LiteralKind.IDENTIFIER

    def describe(self) -> str:
        if self.literal_kind is LiteralKind.IDENTIFIER:
            return str(self.value)
        return self.literal_kind.value


SYMBOL_TOKENS: List[Tuple[str, TokenType]] = [
    (';', TokenType.SEMICOLON),
    ('(', TokenType.LEFT_PAREN),
    (')', TokenType.RIGHT_PAREN),
    (',', TokenType.COMMA),
    ('+', TokenType.PLUS),
    ('-', TokenType.MINUS),
    ('*', TokenType.ASTERISK),
    ('**', TokenType.ASTERISK2),
    ('/', TokenType.SLASH),
    ('=', TokenType.EQUAL),
    ('==', TokenType.EQUAL_EQUAL),
    ('!=', TokenType.BANG_EQUAL),
    ('<', TokenType.LESS),
    ('<=', TokenType.LESS_EQUAL),
    ('>', TokenType.GREATER),
    ('>=', TokenType.GREATER_EQUAL),
]

KEYWORD_TOKENS: List[Tuple[str, TokenType]] = [
    (t.value, t) for t in TokenType
    if t.value.isalpha() and t.value.islower()
]

SymbolTokens = build_trie(SYMBOL_TOKENS)
KeywordTokens = build_trie(KEYWORD_TOKENS)

# Keywords that scan straight to literal tokens
KEYWORD_LITERALS: Dict[TokenType, Tuple[LiteralKind, Any]] = {
    TokenType.TRUE: (LiteralKind.BOOLEAN, True),
    TokenType.FALSE: (LiteralKind.BOOLEAN, False),
    TokenType.NIL: (LiteralKind.NIL, None),
}

# Binding strength of the binary operators handled by the precedence
# climbing loop. `and`/`or` sit above this table in their own productions.
OPERATOR_PRECEDENCE: Dict[TokenType, int] = {
    TokenType.LESS: 1,
    TokenType.LESS_EQUAL: 1,
    TokenType.GREATER: 1,
    TokenType.GREATER_EQUAL: 1,
    TokenType.EQUAL_EQUAL: 1,
    TokenType.BANG_EQUAL: 1,
    TokenType.PLUS: 2,
    TokenType.MINUS: 2,
    TokenType.ASTERISK: 3,
    TokenType.SLASH: 3,
    TokenType.ASTERISK2: 4,
}

RIGHT_ASSOCIATIVE = {TokenType.ASTERISK2}

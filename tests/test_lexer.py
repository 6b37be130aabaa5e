import math

import pytest

from lunet.errors import InvalidCharacter, UnexpectedToken, UnknownEscape, UnknownSymbol
from lunet.lexer import Scanner, tokenize
from lunet.tokens import LiteralKind, LiteralToken, TokenType


def types(source):
    return [t.type for t in tokenize(source)]


@pytest.mark.parametrize('text', ['0', '7', '42', '3.14', '0.1', '0.3', '10.25', '1.', '007.5',
                                  '123456789.987654321'])
def test_number_literal_matches_float(text):
    token = tokenize(text)[0]
    assert isinstance(token, LiteralToken)
    assert token.literal_kind is LiteralKind.NUMBER
    assert token.value == float(text)


@pytest.mark.parametrize('text', ['1' + '0' * 400, '1' + '0' * 400 + '.5', '9' * 320 + '.'])
def test_number_literal_beyond_float_range_is_infinity(text):
    token = tokenize(text)[0]
    assert token.literal_kind is LiteralKind.NUMBER
    assert token.value == math.inf
    assert token.value == float(text)


def test_second_decimal_point_is_invalid_character():
    with pytest.raises(InvalidCharacter) as info:
        tokenize('1.2.3')
    assert info.value.fmt() == "INVALID_CHAR: Received '.' (1:4)"


def test_number_stops_at_non_digit():
    tokens = tokenize('12abc')
    assert tokens[0].value == 12.0
    assert tokens[1].value == 'abc'
    assert tokens[1].literal_kind is LiteralKind.IDENTIFIER


def test_longest_operator_match():
    assert types('a<=b') == [TokenType.LITERAL, TokenType.LESS_EQUAL, TokenType.LITERAL, TokenType.EOF]
    assert types('a < = b')[1:3] == [TokenType.LESS, TokenType.EQUAL]
    assert types('2**3*4')[1:4] == [TokenType.ASTERISK2, TokenType.LITERAL, TokenType.ASTERISK]
    assert types('x==y!=z')[1::2][:2] == [TokenType.EQUAL_EQUAL, TokenType.BANG_EQUAL]
    assert types('(,);') == [TokenType.LEFT_PAREN, TokenType.COMMA, TokenType.RIGHT_PAREN,
                             TokenType.SEMICOLON, TokenType.EOF]


def test_bang_alone_is_unknown_symbol():
    with pytest.raises(UnknownSymbol) as info:
        tokenize('!x')
    assert info.value.message == "Received '!'"


def test_unrecognised_character_is_unknown_symbol():
    with pytest.raises(UnknownSymbol) as info:
        tokenize('var x = 1\nx = @')
    assert info.value.fmt() == "UNKNOWN_SYMBOL: Received '@' (2:5)"


def test_identifier_must_start_with_letter():
    with pytest.raises(UnknownSymbol):
        tokenize('_private')


def test_keywords_and_identifiers():
    tokens = tokenize('var variable end ender a_1b')
    assert tokens[0].type is TokenType.VAR
    assert tokens[1].value == 'variable'
    assert tokens[2].type is TokenType.END
    assert tokens[3].value == 'ender'
    assert tokens[4].value == 'a_1b'
    assert types('elseif else') == [TokenType.ELSEIF, TokenType.ELSE, TokenType.EOF]


def test_boolean_and_nil_keywords_are_literals():
    true_token, false_token, nil_token, _ = tokenize('true false nil')
    assert (true_token.literal_kind, true_token.value) == (LiteralKind.BOOLEAN, True)
    assert (false_token.literal_kind, false_token.value) == (LiteralKind.BOOLEAN, False)
    assert (nil_token.literal_kind, nil_token.value) == (LiteralKind.NIL, None)


def test_string_escapes():
    token = tokenize(r'"a\tb\n\\ \" \'"')[0]
    assert token.literal_kind is LiteralKind.STRING
    assert token.value == 'a\tb\n\\ " \''
    assert tokenize(r"'it\'s'")[0].value == "it's"
    assert tokenize("'say \"hi\"'")[0].value == 'say "hi"'


def test_backslash_newline_and_space_are_elided():
    assert tokenize('"ab\\\ncd"')[0].value == 'abcd'
    assert tokenize('"ab\\ cd"')[0].value == 'abcd'


def test_unknown_escape():
    with pytest.raises(UnknownEscape) as info:
        tokenize(r'"\q"')
    assert info.value.code == 'UNKNOWN_ESCAPE'
    assert info.value.message == "Unknown escape sequence '\\q'"


def test_unterminated_string():
    with pytest.raises(UnexpectedToken) as info:
        tokenize('"abc')
    assert info.value.fmt() == "UNEXP_TOKEN: Received 'EOF' but expected \" (1:4)"


def test_token_positions():
    tokens = tokenize('var x\n  = 12')
    assert [(t.line, t.column) for t in tokens] == [(1, 3), (1, 5), (2, 3), (2, 6), (2, 6)]
    assert tokens[-1].type is TokenType.EOF


def test_empty_source_is_just_eof():
    assert types('') == [TokenType.EOF]
    assert types(' \t\n ') == [TokenType.EOF]


def test_scan_tokens_is_cached():
    scanner = Scanner('1 + 2')
    assert scanner.scan_tokens() is scanner.scan_tokens()


def test_put_back_only_accepts_last_character():
    scanner = Scanner('ab')
    assert scanner.next_char() == 'a'
    with pytest.raises(ValueError):
        scanner.put_back('b')
    scanner.put_back('a')
    assert (scanner.line, scanner.column) == (1, 0)
    assert scanner.next_char() == 'a'
    assert scanner.next_char() == 'b'
    assert scanner.next_char() == ''

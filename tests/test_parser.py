import pytest

from lunet.ast import (
    Assignment, BinaryOp, Block, Call, ExpressionStatement, If, Literal, LoopControl, Repeat,
    UnaryOp, VarDecl, While,
)
from lunet.errors import (
    BadAssignmentTarget, ExpectedTerminal, NestingTooDeep, TokenExpected, UnexpectedToken,
    UnknownSymbol,
)
from lunet.parser import Parser, parse_program
from lunet.printer import expr_to_string
from lunet.tokens import LiteralKind, TokenType


def parse_expr(source):
    program = parse_program(source)
    assert len(program.body) == 1
    stmt = program.body[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expr


@pytest.mark.parametrize('source, expected', [
    ('1+2*3', '(1 + (2 * 3))'),
    ('1*2+3', '((1 * 2) + 3)'),
    ('2**3**2', '(2 ** (3 ** 2))'),
    ('1-2-3', '((1 - 2) - 3)'),
    ('8/4/2', '((8 / 4) / 2)'),
    ('2*3**2', '(2 * (3 ** 2))'),
    ('1 < 2 == true', '((1 < 2) == true)'),
    ('1 + 2 < 3 and x', '(((1 + 2) < 3) and x)'),
    ('a or b and c', '(a or (b and c))'),
    ('a and b or c', '((a and b) or c)'),
    ('a or b or c', '((a or b) or c)'),
    ('-2**2', '((-2) ** 2)'),
    ('--x', '(-(-x))'),
    ('not a == b', '((not a) == b)'),
    ('(1+2)*3', '((1 + 2) * 3)'),
    ('(a or b) + 1', '((a or b) + 1)'),
    ('f(1, 2)(3)', 'f(1, 2)(3)'),
    ('-f()', '(-f())'),
    ('x = y = 3', '(x = (y = 3))'),
    ('"a" + \'b\'', '("a" + "b")'),
])
def test_expression_grouping(source, expected):
    assert expr_to_string(parse_expr(source)) == expected


def test_binary_node_keeps_operator_token():
    expr = parse_expr('1 +\n  2')
    assert isinstance(expr, BinaryOp)
    assert expr.op.type is TokenType.PLUS
    assert (expr.op.line, expr.op.column) == (1, 3)
    assert expr.left == Literal(1.0, LiteralKind.NUMBER, 1, 1)


def test_unary_and_call_nodes():
    expr = parse_expr('not f(x, 1)')
    assert isinstance(expr, UnaryOp)
    assert expr.op.type is TokenType.NOT
    call = expr.operand
    assert isinstance(call, Call)
    assert call.callee.value == 'f'
    assert len(call.args) == 2


def test_assignment_is_right_associative():
    expr = parse_expr('a = b = 1')
    assert isinstance(expr, Assignment)
    assert expr.name == 'a'
    assert isinstance(expr.value, Assignment)
    assert expr.value.name == 'b'


@pytest.mark.parametrize('source', ['x + 1 = 2', '1 = 2', 'f() = 1', '(x) + y = 3'])
def test_bad_assignment_target(source):
    with pytest.raises(BadAssignmentTarget) as info:
        parse_program(source)
    assert info.value.code == 'BAD_ASSG_TRG'


def test_bad_assignment_target_position():
    with pytest.raises(BadAssignmentTarget) as info:
        parse_program('x + 1 = 2')
    assert info.value.fmt() == "BAD_ASSG_TRG: Can't assign to target (1:7)"


def test_missing_close_paren():
    with pytest.raises(UnexpectedToken) as info:
        parse_program('(1 + 2')
    assert info.value.message == "Received 'EOF' but expected )"


def test_expected_terminal():
    with pytest.raises(ExpectedTerminal) as info:
        parse_program('1 + ')
    assert info.value.message == "Received 'EOF' but expected a terminal value"
    with pytest.raises(ExpectedTerminal):
        parse_program('1 + then')


def test_var_and_const_declarations():
    program = parse_program('var x = 1; const c; var y')
    x, c, y = program.body
    assert isinstance(x, VarDecl) and not x.is_const
    assert x.name.value == 'x'
    assert x.initializer == Literal(1.0, LiteralKind.NUMBER, 1, 9)
    assert c.is_const and c.initializer is None
    assert y.initializer is None


def test_declaration_needs_identifier():
    with pytest.raises(UnexpectedToken) as info:
        parse_program('var 1 = 2')
    assert info.value.message == "Received 'Number' but expected Identifier"


def test_statement_forms():
    source = '''
    if a then
        x = 1
    elseif b then
        x = 2
    elseif c then
    else
        x = 3
    end
    while x < 10 do
        x = x + 1
        continue
    end
    repeat
        break
    until done
    block
        var inner = 1
    end
    '''
    if_stmt, while_stmt, repeat_stmt, block = parse_program(source).body
    assert isinstance(if_stmt, If)
    assert len(if_stmt.then_block.statements) == 1
    assert [c.condition.value for c in if_stmt.elseif_clauses] == ['b', 'c']
    assert if_stmt.elseif_clauses[1].block == Block(())
    assert len(if_stmt.else_block.statements) == 1
    assert isinstance(while_stmt, While)
    assert isinstance(while_stmt.body.statements[1], LoopControl)
    assert while_stmt.body.statements[1].keyword.type is TokenType.CONTINUE
    assert isinstance(repeat_stmt, Repeat)
    assert repeat_stmt.condition.value == 'done'
    assert repeat_stmt.body.statements[0].keyword.type is TokenType.BREAK
    assert isinstance(block, Block)
    assert block.statements[0].name.value == 'inner'


def test_if_without_else():
    if_stmt = parse_program('if a then end').body[0]
    assert if_stmt.elseif_clauses == ()
    assert if_stmt.else_block is None


def test_semicolons_are_optional():
    assert len(parse_program('var x = 1; x = 2;').body) == 2
    assert len(parse_program('var x = 1\nx = 2').body) == 2
    assert len(parse_program(';;var x = 1;;').body) == 1


def test_unclosed_block():
    with pytest.raises(TokenExpected) as info:
        parse_program('block\n  var x = 1')
    assert info.value.fmt() == 'TOKEN_EXP: Expected end (2:11)'


def test_recovery_reports_every_error():
    reported = []
    parser = Parser.from_source('var = 1\nvar y = 2\nprint(1 +)\nvar z = 3', reported.append)
    program = parser.parse()
    assert [stmt.name.value for stmt in program.body] == ['y', 'z']
    assert [type(e) for e in parser.errors] == [UnexpectedToken, ExpectedTerminal]
    assert reported == parser.errors
    assert parser.errors[1].line == 3


def test_recovery_inside_block():
    parser = Parser.from_source('while x do\n  var = 1;\n  print(2)\nend\nvar after = 1')
    program = parser.parse()
    assert len(parser.errors) == 1
    loop, after = program.body
    assert len(loop.body.statements) == 1
    assert after.name.value == 'after'


def test_recovery_stops_at_block_end():
    parser = Parser.from_source('while x do\n  y = 1 +\nend\nprint(y)')
    program = parser.parse()
    assert len(parser.errors) == 1
    assert isinstance(parser.errors[0], ExpectedTerminal)
    assert len(program.body) == 2


def test_recovery_keeps_statement_keyword_at_error():
    parser = Parser.from_source('x = var y = 1')
    program = parser.parse()
    assert len(parser.errors) == 1
    assert program.body[0].name.value == 'y'


def test_parse_program_raises_first_error_after_reporting_all():
    reported = []
    with pytest.raises(UnexpectedToken):
        parse_program('var = 1;\n)\nvar ok = 1', report=reported.append)
    assert len(reported) == 2


def test_lexical_error_aborts_parse():
    reported = []
    with pytest.raises(UnknownSymbol):
        parse_program('var = 1\nvar y = @', report=reported.append)
    assert reported == []


def test_deep_nesting_is_a_syntax_error():
    reported = []
    source = 'print(' + '(' * 2000 + '1' + ')' * 2000 + ')'
    with pytest.raises(NestingTooDeep) as info:
        parse_program(source, report=reported.append)
    assert info.value.code == 'TOO_DEEP'
    assert info.value.line == 1
    assert reported == [info.value]


def test_moderate_nesting_still_parses():
    program = parse_program('var x = ' + '(' * 50 + '1' + ')' * 50)
    assert isinstance(program.body[0].initializer, Literal)

"""Parser for the Lunet language.

Statements are parsed by recursive descent, one method per statement
kind. Expressions are layered as

    assignment -> or -> and -> precedence climbing -> unary -> terminal

where the precedence climbing loop handles every other binary operator
using `OPERATOR_PRECEDENCE`. Only `**` is right-associative.

A syntax error inside a statement does not stop the parse. The error is
reported, the parser skips ahead to a statement boundary and carries on,
so a single run reports every broken statement. Lexical errors are
different: the whole input is scanned up front and the first lexical
error aborts the parse.

`parse_program` is the public entry point.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from .ast import (
    Assignment, BinaryOp, Block, Call, ElseIf, Expr, ExpressionStatement, If, Literal,
    LoopControl, Program, Repeat, Stmt, UnaryOp, VarDecl, While,
)
from .errors import (
    BadAssignmentTarget, ExpectedTerminal, NestingTooDeep, ParseError, TokenExpected,
    UnexpectedToken,
)
from .lexer import Scanner
from .tokens import (
    OPERATOR_PRECEDENCE, RIGHT_ASSOCIATIVE, LiteralKind, LiteralToken, Token, TokenType,
)

# Tokens that begin a statement; recovery resumes at any of them.
STATEMENT_KEYWORDS = {
    TokenType.VAR, TokenType.CONST, TokenType.BLOCK, TokenType.IF, TokenType.WHILE,
    TokenType.REPEAT, TokenType.BREAK, TokenType.CONTINUE,
}

# Tokens that close a statement list
BLOCK_TERMINATORS = {TokenType.END, TokenType.UNTIL, TokenType.ELSEIF, TokenType.ELSE}

UNARY_OPERATORS = {TokenType.MINUS, TokenType.NOT}

ErrorReporter = Callable[[ParseError], None]


class Parser:
    def __init__(self, tokens: Sequence[Token], report: Optional[ErrorReporter] = None):
        if not tokens or tokens[-1].type is not TokenType.EOF:
            last = tokens[-1] if tokens else None
            eof = Token(TokenType.EOF, last.line if last else 0, last.column if last else 0)
            tokens = list(tokens) + [eof]
        self.tokens = list(tokens)
        self.pos = 0
        self.report = report
        self.errors: List[ParseError] = []
        self.block_depth = 0

    @classmethod
    def from_source(cls, source: str, report: Optional[ErrorReporter] = None) -> 'Parser':
        """Scan `source` and build a parser over its tokens.

        Lexical errors propagate to the caller.
        """
        return cls(Scanner(source).scan_tokens(), report)

    # Cursor

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    @property
    def previous(self) -> Optional[Token]:
        return self.tokens[self.pos - 1] if self.pos > 0 else None

    def is_at_end(self) -> bool:
        return self.current.type is TokenType.EOF

    def advance(self) -> Token:
        token = self.current
        if not self.is_at_end():
            self.pos += 1
        return token

    def check(self, *types: TokenType) -> bool:
        return self.current.type in types

    def match(self, *types: TokenType) -> Optional[Token]:
        if self.check(*types):
            return self.advance()
        return None

    def expect(self, *types: TokenType) -> Token:
        if self.check(*types):
            return self.advance()
        token = self.current
        raise UnexpectedToken(token.describe(), [t.value for t in types], token.line, token.column)

    def expect_identifier(self) -> LiteralToken:
        token = self.current
        if isinstance(token, LiteralToken) and token.literal_kind is LiteralKind.IDENTIFIER:
            self.advance()
            return token
        raise UnexpectedToken(token.describe(), [LiteralKind.IDENTIFIER.value], token.line, token.column)

    # Program and statements

    def parse(self) -> Program:
        statements: List[Stmt] = []
        try:
            while not self.is_at_end():
                if self.match(TokenType.SEMICOLON):
                    continue
                stmt = self.declaration()
                if stmt is not None:
                    statements.append(stmt)
        except RecursionError:
            # Parsing stops here; the rest of the input is not examined
            token = self.current
            self.add_error(NestingTooDeep(token.line, token.column))
        return Program(tuple(statements))

    def add_error(self, err: ParseError) -> None:
        self.errors.append(err)
        if self.report is not None:
            self.report(err)

    def declaration(self) -> Optional[Stmt]:
        start = self.pos
        try:
            return self.parse_statement()
        except ParseError as err:
            self.add_error(err)
            self.synchronize(start)
            return None

    def synchronize(self, start: int) -> None:
        """Discard tokens up to the next statement boundary."""
        if self.pos == start:
            self.advance()
        while not self.is_at_end():
            previous = self.previous
            if previous is not None and previous.type is TokenType.SEMICOLON and self.pos > start:
                return
            if self.check(*STATEMENT_KEYWORDS):
                return
            if self.block_depth > 0 and self.check(*BLOCK_TERMINATORS):
                return
            self.advance()

    def parse_statement(self) -> Stmt:
        token = self.current
        if token.type in (TokenType.VAR, TokenType.CONST):
            return self.parse_var_decl()
        if token.type is TokenType.BLOCK:
            return self.parse_block_stmt()
        if token.type is TokenType.IF:
            return self.parse_if_stmt()
        if token.type is TokenType.WHILE:
            return self.parse_while_stmt()
        if token.type is TokenType.REPEAT:
            return self.parse_repeat_stmt()
        if token.type in (TokenType.BREAK, TokenType.CONTINUE):
            self.advance()
            self.match(TokenType.SEMICOLON)
            return LoopControl(token)
        return self.parse_expression_statement()

    def parse_var_decl(self) -> VarDecl:
        keyword = self.advance()
        name = self.expect_identifier()
        initializer: Optional[Expr] = None
        if self.match(TokenType.EQUAL):
            initializer = self.parse_expression()
        self.match(TokenType.SEMICOLON)
        return VarDecl(name, keyword.type is TokenType.CONST, initializer)

    def parse_block_body(self, *terminators: TokenType) -> Block:
        """Parse statements until one of `terminators` (left unconsumed)."""
        statements: List[Stmt] = []
        self.block_depth += 1
        try:
            while not self.check(*terminators):
                if self.is_at_end():
                    raise TokenExpected(' or '.join(t.value for t in terminators),
                                        self.current.line, self.current.column)
                if self.match(TokenType.SEMICOLON):
                    continue
                stmt = self.declaration()
                if stmt is not None:
                    statements.append(stmt)
        finally:
            self.block_depth -= 1
        return Block(tuple(statements))

    def parse_block_stmt(self) -> Block:
        self.expect(TokenType.BLOCK)
        body = self.parse_block_body(TokenType.END)
        self.expect(TokenType.END)
        return body

    def parse_if_stmt(self) -> If:
        self.expect(TokenType.IF)
        condition = self.parse_expression()
        self.expect(TokenType.THEN)
        then_block = self.parse_block_body(TokenType.ELSEIF, TokenType.ELSE, TokenType.END)
        clauses: List[ElseIf] = []
        while self.match(TokenType.ELSEIF):
            clause_condition = self.parse_expression()
            self.expect(TokenType.THEN)
            clause_block = self.parse_block_body(TokenType.ELSEIF, TokenType.ELSE, TokenType.END)
            clauses.append(ElseIf(clause_condition, clause_block))
        else_block: Optional[Block] = None
        if self.match(TokenType.ELSE):
            else_block = self.parse_block_body(TokenType.END)
        self.expect(TokenType.END)
        return If(condition, then_block, tuple(clauses), else_block)

    def parse_while_stmt(self) -> While:
        self.expect(TokenType.WHILE)
        condition = self.parse_expression()
        self.expect(TokenType.DO)
        body = self.parse_block_body(TokenType.END)
        self.expect(TokenType.END)
        return While(condition, body)

    def parse_repeat_stmt(self) -> Repeat:
        self.expect(TokenType.REPEAT)
        body = self.parse_block_body(TokenType.UNTIL)
        self.expect(TokenType.UNTIL)
        condition = self.parse_expression()
        self.match(TokenType.SEMICOLON)
        return Repeat(body, condition)

    def parse_expression_statement(self) -> ExpressionStatement:
        expr = self.parse_assignment()
        self.match(TokenType.SEMICOLON)
        return ExpressionStatement(expr)

    # Expressions

    def parse_assignment(self) -> Expr:
        left = self.parse_expression()
        equals = self.match(TokenType.EQUAL)
        if equals is None:
            return left
        value = self.parse_assignment()
        if isinstance(left, Literal) and left.is_identifier:
            target = LiteralToken(TokenType.LITERAL, left.line, left.column, left.value,
                                  LiteralKind.IDENTIFIER)
            return Assignment(target, value)
        raise BadAssignmentTarget(equals.line, equals.column)

    def parse_expression(self) -> Expr:
        return self.parse_or()

    def parse_or(self) -> Expr:
        node = self.parse_and()
        while True:
            op = self.match(TokenType.OR)
            if op is None:
                return node
            node = BinaryOp(op, node, self.parse_and())

    def parse_and(self) -> Expr:
        node = self.parse_binary(0)
        while True:
            op = self.match(TokenType.AND)
            if op is None:
                return node
            node = BinaryOp(op, node, self.parse_binary(0))

    def parse_binary(self, min_precedence: int) -> Expr:
        """Precedence climbing over OPERATOR_PRECEDENCE."""
        left = self.parse_unary()
        while True:
            precedence = OPERATOR_PRECEDENCE.get(self.current.type)
            if precedence is None or precedence <= min_precedence:
                return left
            op = self.advance()
            if op.type in RIGHT_ASSOCIATIVE:
                right = self.parse_binary(precedence - 1)
            else:
                right = self.parse_binary(precedence)
            left = BinaryOp(op, left, right)

    def parse_unary(self) -> Expr:
        op = self.match(*UNARY_OPERATORS)
        if op is not None:
            return UnaryOp(op, self.parse_unary())
        return self.parse_call()

    def parse_call(self) -> Expr:
        node = self.parse_terminal()
        while self.match(TokenType.LEFT_PAREN):
            args: List[Expr] = []
            if not self.check(TokenType.RIGHT_PAREN):
                args.append(self.parse_expression())
                while self.match(TokenType.COMMA):
                    args.append(self.parse_expression())
            paren = self.expect(TokenType.RIGHT_PAREN)
            node = Call(node, tuple(args), paren)
        return node

    def parse_terminal(self) -> Expr:
        token = self.current
        if isinstance(token, LiteralToken):
            self.advance()
            return Literal(token.value, token.literal_kind, token.line, token.column)
        if self.match(TokenType.LEFT_PAREN):
            expr = self.parse_expression()
            self.expect(TokenType.RIGHT_PAREN)
            return expr
        raise ExpectedTerminal(token.describe(), token.line, token.column)


def parse_program(source: str, report: Optional[ErrorReporter] = None) -> Program:
    """Parse Lunet source code into a Program AST.

    Every syntax error is passed to `report` as it is found; if any
    occurred the first one is raised once parsing finishes.
    """
    parser = Parser.from_source(source, report)
    program = parser.parse()
    if parser.errors:
        raise parser.errors[0]
    return program

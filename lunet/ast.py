"""Abstract Syntax Tree (AST) definitions for the Lunet language.

Nodes are frozen dataclasses; once the parser builds a tree nothing
changes it. Operator nodes keep their operator token so the interpreter
can report runtime errors at the operator's position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .tokens import LiteralKind, Token


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


# Expressions

@dataclass(frozen=True)
class Expr(Node):
    pass


@dataclass(frozen=True)
class Literal(Expr):
    value: Any
    literal_kind: LiteralKind
    line: int = 0
    column: int = 0

    @property
    def is_identifier(self) -> bool:
        return self.literal_kind is LiteralKind.IDENTIFIER


@dataclass(frozen=True)
class BinaryOp(Expr):
    op: Token
    left: Expr
    right: Expr


@dataclass(frozen=True)
class UnaryOp(Expr):
    op: Token
    operand: Expr


@dataclass(frozen=True)
class Assignment(Expr):
    target: Token  # identifier literal token
    value: Expr

    @property
    def name(self) -> str:
        return self.target.value


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    args: Tuple[Expr, ...]
    paren: Token  # closing ')', used for error positions


# Statements

@dataclass(frozen=True)
class Stmt(Node):
    pass


@dataclass(frozen=True)
class ExpressionStatement(Stmt):
    expr: Expr


@dataclass(frozen=True)
class VarDecl(Stmt):
    name: Token  # identifier literal token
    is_const: bool
    initializer: Optional[Expr] = None


@dataclass(frozen=True)
class Block(Stmt):
    statements: Tuple[Stmt, ...] = ()


@dataclass(frozen=True)
class ElseIf:
    condition: Expr
    block: Block


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_block: Block
    elseif_clauses: Tuple[ElseIf, ...] = ()
    else_block: Optional[Block] = None


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Block


@dataclass(frozen=True)
class Repeat(Stmt):
    body: Block
    condition: Expr


@dataclass(frozen=True)
class LoopControl(Stmt):
    keyword: Token  # BREAK or CONTINUE


@dataclass(frozen=True)
class Program(Node):
    body: Tuple[Stmt, ...] = field(default_factory=tuple)

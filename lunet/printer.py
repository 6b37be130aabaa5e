"""Readable rendering of Lunet ASTs.

Expressions are fully parenthesised so the grouping chosen by the parser
is visible, e.g. `1 + 2 * 3` prints as `(1 + (2 * 3))`.
"""

from typing import List

from .ast import (
    Assignment, BinaryOp, Block, Call, Expr, ExpressionStatement, If, Literal, LoopControl,
    Program, Repeat, Stmt, UnaryOp, VarDecl, While,
)
from .tokens import LiteralKind, TokenType
from .types import to_string

INDENT = '  '


def expr_to_string(node: Expr) -> str:
    if isinstance(node, Literal):
        if node.literal_kind is LiteralKind.STRING:
            escaped = node.value.replace('\\', '\\\\').replace('"', '\\"')
            escaped = escaped.replace('\n', '\\n').replace('\t', '\\t')
            return f'"{escaped}"'
        if node.literal_kind is LiteralKind.IDENTIFIER:
            return node.value
        return to_string(node.value)
    if isinstance(node, BinaryOp):
        return f"({expr_to_string(node.left)} {node.op.type.value} {expr_to_string(node.right)})"
    if isinstance(node, UnaryOp):
        if node.op.type is TokenType.NOT:
            return f"(not {expr_to_string(node.operand)})"
        return f"({node.op.type.value}{expr_to_string(node.operand)})"
    if isinstance(node, Assignment):
        return f"({node.name} = {expr_to_string(node.value)})"
    if isinstance(node, Call):
        args = ', '.join(expr_to_string(a) for a in node.args)
        return f"{expr_to_string(node.callee)}({args})"
    raise TypeError(f"cannot print {type(node).__name__}")


def stmt_lines(node: Stmt, depth: int = 0) -> List[str]:
    pad = INDENT * depth
    if isinstance(node, ExpressionStatement):
        return [pad + expr_to_string(node.expr)]
    if isinstance(node, VarDecl):
        keyword = 'const' if node.is_const else 'var'
        line = f"{pad}{keyword} {node.name.value}"
        if node.initializer is not None:
            line += f" = {expr_to_string(node.initializer)}"
        return [line]
    if isinstance(node, LoopControl):
        return [pad + node.keyword.type.value]
    if isinstance(node, Block):
        return [pad + 'block'] + block_lines(node, depth + 1) + [pad + 'end']
    if isinstance(node, If):
        lines = [f"{pad}if {expr_to_string(node.condition)} then"]
        lines += block_lines(node.then_block, depth + 1)
        for clause in node.elseif_clauses:
            lines.append(f"{pad}elseif {expr_to_string(clause.condition)} then")
            lines += block_lines(clause.block, depth + 1)
        if node.else_block is not None:
            lines.append(pad + 'else')
            lines += block_lines(node.else_block, depth + 1)
        return lines + [pad + 'end']
    if isinstance(node, While):
        lines = [f"{pad}while {expr_to_string(node.condition)} do"]
        return lines + block_lines(node.body, depth + 1) + [pad + 'end']
    if isinstance(node, Repeat):
        lines = [pad + 'repeat'] + block_lines(node.body, depth + 1)
        return lines + [f"{pad}until {expr_to_string(node.condition)}"]
    raise TypeError(f"cannot print {type(node).__name__}")


def block_lines(block: Block, depth: int) -> List[str]:
    lines: List[str] = []
    for stmt in block.statements:
        lines.extend(stmt_lines(stmt, depth))
    return lines


def program_to_string(program: Program) -> str:
    lines: List[str] = []
    for stmt in program.body:
        lines.extend(stmt_lines(stmt))
    return '\n'.join(lines)

"""JSON serialization/deserialization for the Lunet AST.

This module converts between Lunet AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types and the tokens they hold.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .ast import (
    Assignment,
    BinaryOp,
    Block,
    Call,
    ElseIf,
    ExpressionStatement,
    If,
    Literal,
    LoopControl,
    Program,
    Repeat,
    UnaryOp,
    VarDecl,
    While,
)
from .tokens import LiteralKind, LiteralToken, Token, TokenType


def token_to_obj(t: Token) -> Dict[str, Any]:
    obj = {"type": t.type.name, "line": t.line, "column": t.column, "value": t.value}
    if isinstance(t, LiteralToken):
        obj["literal_kind"] = t.literal_kind.name
    return obj


def token_from_obj(o: Dict[str, Any]) -> Token:
    token_type = TokenType[o["type"]]
    if "literal_kind" in o:
        return LiteralToken(token_type, o["line"], o["column"], o.get("value"), LiteralKind[o["literal_kind"]])
    return Token(token_type, o["line"], o["column"], o.get("value"))


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    # Expressions
    if isinstance(node, Literal):
        return {
            "type": "Literal",
            "value": node.value,
            "literal_kind": node.literal_kind.name,
            "line": node.line,
            "column": node.column,
        }
    if isinstance(node, BinaryOp):
        return {
            "type": "BinaryOp",
            "op": token_to_obj(node.op),
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": token_to_obj(node.op), "operand": ast_to_obj(node.operand)}
    if isinstance(node, Assignment):
        return {"type": "Assignment", "target": token_to_obj(node.target), "value": ast_to_obj(node.value)}
    if isinstance(node, Call):
        return {
            "type": "Call",
            "callee": ast_to_obj(node.callee),
            "args": [ast_to_obj(a) for a in node.args],
            "paren": token_to_obj(node.paren),
        }

    # Statements
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, ExpressionStatement):
        return {"type": "ExpressionStatement", "expr": ast_to_obj(node.expr)}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": token_to_obj(node.name),
            "is_const": node.is_const,
            "initializer": ast_to_obj(node.initializer),
        }
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_block": ast_to_obj(node.then_block),
            "elseif_clauses": [
                {"condition": ast_to_obj(c.condition), "block": ast_to_obj(c.block)}
                for c in node.elseif_clauses
            ],
            "else_block": ast_to_obj(node.else_block),
        }
    if isinstance(node, While):
        return {"type": "While", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, Repeat):
        return {"type": "Repeat", "body": ast_to_obj(node.body), "condition": ast_to_obj(node.condition)}
    if isinstance(node, LoopControl):
        return {"type": "LoopControl", "keyword": token_to_obj(node.keyword)}

    raise TypeError(f"Unsupported node type for serialization: {type(node).__name__}")


def ast_from_obj(obj: Optional[Dict[str, Any]]) -> Any:
    if obj is None:
        return None
    t = obj.get("type")

    if t == "Literal":
        return Literal(obj["value"], LiteralKind[obj["literal_kind"]], obj.get("line", 0), obj.get("column", 0))
    if t == "BinaryOp":
        return BinaryOp(token_from_obj(obj["op"]), ast_from_obj(obj["left"]), ast_from_obj(obj["right"]))
    if t == "UnaryOp":
        return UnaryOp(token_from_obj(obj["op"]), ast_from_obj(obj["operand"]))
    if t == "Assignment":
        return Assignment(token_from_obj(obj["target"]), ast_from_obj(obj["value"]))
    if t == "Call":
        return Call(
            ast_from_obj(obj["callee"]),
            tuple(ast_from_obj(a) for a in obj.get("args", [])),
            token_from_obj(obj["paren"]),
        )

    if t == "Program":
        return Program(tuple(ast_from_obj(n) for n in obj.get("body", [])))
    if t == "ExpressionStatement":
        return ExpressionStatement(ast_from_obj(obj["expr"]))
    if t == "VarDecl":
        return VarDecl(token_from_obj(obj["name"]), bool(obj.get("is_const", False)), ast_from_obj(obj.get("initializer")))
    if t == "Block":
        return Block(tuple(ast_from_obj(s) for s in obj.get("statements", [])))
    if t == "If":
        clauses = tuple(
            ElseIf(ast_from_obj(c["condition"]), ast_from_obj(c["block"]))
            for c in obj.get("elseif_clauses", [])
        )
        return If(ast_from_obj(obj["condition"]), ast_from_obj(obj["then_block"]), clauses, ast_from_obj(obj.get("else_block")))
    if t == "While":
        return While(ast_from_obj(obj["condition"]), ast_from_obj(obj["body"]))
    if t == "Repeat":
        return Repeat(ast_from_obj(obj["body"]), ast_from_obj(obj["condition"]))
    if t == "LoopControl":
        return LoopControl(token_from_obj(obj["keyword"]))

    raise ValueError(f"Unknown AST object type: {t}")

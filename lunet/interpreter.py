"""Tree-walking interpreter for the Lunet language.

`run_source` is the single entry point used by hosts: it scans, parses
and evaluates a program and returns either None or the formatted error.
The `Interpreter` class underneath executes an already parsed `Program`.

Statement execution returns a `Flow` value. `break` and `continue` are
ordinary results handed back up to the nearest loop, which decides what
to do with them. Runtime errors are `ExecutionError` exceptions and
abort the whole program.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, List, Optional, Sequence

from .ast import (
    Assignment, BinaryOp, Block, Call, Expr, ExpressionStatement, If, Literal, LoopControl,
    Program, Repeat, Stmt, UnaryOp, VarDecl, While,
)
from .builtin_function import BuiltinFunction
from .environment import Environment, ScopeState
from .errors import (
    ArgumentCount, BadComparison, DivideByZero, ExecutionError, InvalidLoopControl,
    LunetError, NotCallable, ParseError, StackOverflow, UnexpectedType,
)
from .parser import parse_program
from .std import populate_native_environment
from .std.host import Host
from .tokens import LiteralKind, Token, TokenType
from .types import NUMBER, equal_values, is_number, is_truthy, to_string, type_name


class Flow(Enum):
    NORMAL = 'normal'
    BREAK = 'break'
    CONTINUE = 'continue'


class Interpreter:
    """Core interpreter that executes a Lunet AST."""
    def __init__(self, host: Optional[Host] = None, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.host = host if host is not None else Host()
        self.globals = populate_native_environment(self.host)
        # Scripts run one frame below the natives so they may shadow them
        self.environment = Environment(parent=self.globals)
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                self.host.log(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def report_parse_error(self, err: ParseError):
        self.host.log(err.fmt())
        self.debug(f"parse error: {err.fmt()}")

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> None:
        if env is None:
            env = self.environment
        try:
            self.execute_block(program.body, env)
        except RecursionError:
            raise StackOverflow() from None

    def execute_block(self, statements: Sequence[Stmt], env: Environment) -> Flow:
        for stmt in statements:
            flow = self.execute(stmt, env)
            if flow is not Flow.NORMAL:
                return flow
        return Flow.NORMAL

    def execute(self, node: Stmt, env: Environment) -> Flow:
        if isinstance(node, ExpressionStatement):
            self.evaluate(node.expr, env)
            return Flow.NORMAL
        if isinstance(node, VarDecl):
            name = node.name.value
            try:
                if node.initializer is not None:
                    value = self.evaluate(node.initializer, env)
                    env.declare(name, node.is_const, value, initialized=True)
                else:
                    env.declare(name, node.is_const)
            except ExecutionError as ex:
                raise ex.at(node.name.line, node.name.column)
            if self.debug_level >= 2:
                kind = 'const' if node.is_const else 'var'
                self.debug(f"declare {kind} {name} = {to_string(env.values[name].value)}")
            return Flow.NORMAL
        if isinstance(node, Block):
            # The child frame is only referenced from this call, so it is
            # dropped however the block exits
            return self.execute_block(node.statements, Environment(parent=env))
        if isinstance(node, If):
            branches = [(node.condition, node.then_block)]
            branches.extend((clause.condition, clause.block) for clause in node.elseif_clauses)
            for condition, block in branches:
                cond = self.evaluate(condition, env)
                if self.debug_level >= 3:
                    self.debug(f"if condition {to_string(cond)} -> {is_truthy(cond)}")
                if is_truthy(cond):
                    return self.execute(block, env)
            if node.else_block is not None:
                return self.execute(node.else_block, env)
            return Flow.NORMAL
        if isinstance(node, While):
            iteration = 0
            while is_truthy(self.evaluate(node.condition, env)):
                if self.debug_level >= 3:
                    self.debug(f"while iteration {iteration}")
                iteration += 1
                flow = self.execute_loop_body(node.body, env)
                if flow is Flow.BREAK:
                    break
            return Flow.NORMAL
        if isinstance(node, Repeat):
            iteration = 0
            while True:
                if self.debug_level >= 3:
                    self.debug(f"repeat iteration {iteration}")
                iteration += 1
                flow = self.execute_loop_body(node.body, env)
                if flow is Flow.BREAK:
                    break
                if is_truthy(self.evaluate(node.condition, env)):
                    break
            return Flow.NORMAL
        if isinstance(node, LoopControl):
            keyword = node.keyword
            if env.state is not ScopeState.LOOP:
                raise InvalidLoopControl(keyword.type.value, keyword.line, keyword.column)
            return Flow.BREAK if keyword.type is TokenType.BREAK else Flow.CONTINUE
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_loop_body(self, body: Block, env: Environment) -> Flow:
        return self.execute_block(body.statements, Environment(parent=env, state=ScopeState.LOOP))

    def evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            if node.literal_kind is LiteralKind.IDENTIFIER:
                try:
                    return env.get(node.value)
                except ExecutionError as ex:
                    raise ex.at(node.line, node.column)
            return node.value
        if isinstance(node, Assignment):
            value = self.evaluate(node.value, env)
            try:
                env.set(node.name, value)
            except ExecutionError as ex:
                raise ex.at(node.target.line, node.target.column)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name} = {to_string(value)}")
            return value
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            if node.op.type is TokenType.NOT:
                return not is_truthy(operand)
            if node.op.type is TokenType.MINUS:
                if not is_number(operand):
                    raise UnexpectedType(type_name(operand), NUMBER, node.op.line, node.op.column)
                return -operand
            raise ExecutionError(f"unsupported unary operator {node.op.type.value}",
                                 node.op.line, node.op.column)
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            # Short-circuit; the operand itself is the result
            if node.op.type is TokenType.OR:
                return left if is_truthy(left) else self.evaluate(node.right, env)
            if node.op.type is TokenType.AND:
                return self.evaluate(node.right, env) if is_truthy(left) else left
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, Call):
            func = self.evaluate(node.callee, env)
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(func, args, node.paren)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: Any, args: List[Any], paren: Token) -> Any:
        if not isinstance(func, BuiltinFunction):
            raise NotCallable(type_name(func), paren.line, paren.column)
        if func.arity is not None and len(args) != func.arity:
            raise ArgumentCount(func.name, func.arity, len(args), paren.line, paren.column)
        try:
            return func.fn(args)
        except ExecutionError as ex:
            raise ex.at(paren.line, paren.column)

    def apply_binary_op(self, op: Token, a: Any, b: Any) -> Any:
        kind = op.type
        if kind is TokenType.EQUAL_EQUAL:
            return equal_values(a, b)
        if kind is TokenType.BANG_EQUAL:
            return not equal_values(a, b)
        if kind in (TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.GREATER_EQUAL):
            return self.compare(op, a, b)
        # String concatenation
        if kind is TokenType.PLUS and (isinstance(a, str) or isinstance(b, str)):
            return to_string(a) + to_string(b)
        for operand in (a, b):
            if not is_number(operand):
                raise UnexpectedType(type_name(operand), NUMBER, op.line, op.column)
        if kind is TokenType.PLUS:
            return a + b
        if kind is TokenType.MINUS:
            return a - b
        if kind is TokenType.ASTERISK:
            return a * b
        if kind is TokenType.SLASH:
            if b == 0:
                raise DivideByZero(op.line, op.column)
            return a / b
        if kind is TokenType.ASTERISK2:
            return power(a, b)
        raise ExecutionError(f"unknown operator {kind.value}", op.line, op.column)

    def compare(self, op: Token, a: Any, b: Any) -> bool:
        comparable = (is_number(a) and is_number(b)) or (isinstance(a, str) and isinstance(b, str))
        if not comparable:
            raise BadComparison(type_name(a), type_name(b), op.line, op.column)
        kind = op.type
        if kind is TokenType.LESS:
            return a < b
        if kind is TokenType.LESS_EQUAL:
            return a <= b
        if kind is TokenType.GREATER:
            return a > b
        return a >= b


def power(a: float, b: float) -> float:
    """`a ** b` with IEEE results where Python would raise."""
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and b.is_integer() and b % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # zero to a negative power, or a negative base with a fractional exponent
        if a == 0:
            return math.inf
        return math.nan


def run_source(source: str, host: Optional[Host] = None, debug_level: int = 0) -> Optional[str]:
    """Scan, parse and run `source`.

    Returns None on success, otherwise the formatted error. When the
    program has syntax errors all of them are logged through the host,
    nothing is executed and the first one is returned.
    """
    interpreter = Interpreter(host=host, debug_level=debug_level)
    try:
        program = parse_program(source, report=interpreter.report_parse_error)
        interpreter.run(program)
    except LunetError as err:
        interpreter.debug(f"error: {err.fmt()}")
        return err.fmt()
    finally:
        interpreter.close()
    return None


def run_program(source: str, host: Optional[Host] = None, debug_level: int = 0) -> Interpreter:
    """Parse and run `source`, raising on the first error.

    Returns the interpreter so callers can inspect the script frame.
    """
    interpreter = Interpreter(host=host, debug_level=debug_level)
    try:
        program = parse_program(source, report=interpreter.report_parse_error)
        interpreter.run(program)
    finally:
        interpreter.close()
    return interpreter

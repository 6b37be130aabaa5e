"""Error taxonomy shared by the Lunet lexer, parser and interpreter.

Every error carries a short code, a message and an optional source
position. `fmt()` renders the form shown to users:

    CODE: message (line:column)

Unknown positions render as 0.
"""

from typing import List, Optional


class LunetError(Exception):
    """Base class for every error raised by the Lunet toolchain."""
    code = 'ERROR'

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def at(self, line: Optional[int], column: Optional[int]) -> 'LunetError':
        """Stamp a position onto the error unless it already has one."""
        if self.line is None:
            self.line = line
            self.column = column
        return self

    def fmt(self) -> str:
        return f"{self.code}: {self.message} ({self.line or 0}:{self.column or 0})"

    def __str__(self) -> str:
        return self.fmt()


###############################################################################
# Lexical errors
###############################################################################

class LexerError(LunetError):
    pass


class InvalidCharacter(LexerError):
    code = 'INVALID_CHAR'

    def __init__(self, received: str, line=None, column=None):
        super().__init__(f"Received '{received}'", line, column)


class UnknownSymbol(LexerError):
    code = 'UNKNOWN_SYMBOL'

    def __init__(self, received: str, line=None, column=None):
        super().__init__(f"Received '{received}'", line, column)


class UnknownEscape(LexerError):
    code = 'UNKNOWN_ESCAPE'

    def __init__(self, received: str, line=None, column=None):
        super().__init__(f"Unknown escape sequence '\\{received}'", line, column)


###############################################################################
# Syntax errors
###############################################################################

class ParseError(LunetError):
    pass


class UnexpectedToken(ParseError):
    code = 'UNEXP_TOKEN'

    def __init__(self, received: str, expected: List[str], line=None, column=None):
        if len(expected) > 1:
            wanted = 'one of: ' + ', '.join(expected)
        else:
            wanted = ''.join(expected)
        super().__init__(f"Received '{received}' but expected {wanted}", line, column)
        self.received = received
        self.expected = list(expected)


class TokenExpected(ParseError):
    code = 'TOKEN_EXP'

    def __init__(self, expected: str, line=None, column=None):
        super().__init__(f"Expected {expected}", line, column)


class ExpectedTerminal(ParseError):
    code = 'EXP_TERM'

    def __init__(self, received: str, line=None, column=None):
        super().__init__(f"Received '{received}' but expected a terminal value", line, column)


class BadAssignmentTarget(ParseError):
    code = 'BAD_ASSG_TRG'

    def __init__(self, line=None, column=None):
        super().__init__("Can't assign to target", line, column)


class NestingTooDeep(ParseError):
    code = 'TOO_DEEP'

    def __init__(self, line=None, column=None):
        super().__init__("Program is nested too deeply to parse", line, column)


###############################################################################
# Runtime errors
###############################################################################

class ExecutionError(LunetError):
    """Raised while evaluating a program; always aborts the whole run."""
    pass


class VarExists(ExecutionError):
    code = 'VAR_EXISTS'

    def __init__(self, name: str, line=None, column=None):
        super().__init__(f"Variable {name} already exists", line, column)


class VarDNE(ExecutionError):
    code = 'VAR_DNE'

    def __init__(self, name: str, line=None, column=None):
        super().__init__(f"Variable {name} does not exist", line, column)


class ConstVar(ExecutionError):
    code = 'CONST_VAR'

    def __init__(self, name: str, line=None, column=None):
        super().__init__(f"Variable {name} is constant and can't be reassigned", line, column)


class UnexpectedType(ExecutionError):
    code = 'UNEXP_TYPE'

    def __init__(self, received: str, expected: str, line=None, column=None):
        super().__init__(f"Received a {received} but expected {expected}", line, column)


class DivideByZero(ExecutionError):
    code = 'DIV_BY_ZERO'

    def __init__(self, line=None, column=None):
        super().__init__("Attempted to divide by zero", line, column)


class BadComparison(ExecutionError):
    code = 'BAD_CMP'

    def __init__(self, left_type: str, right_type: str, line=None, column=None):
        super().__init__(f"Can't compare {left_type} and {right_type}", line, column)


class NotCallable(ExecutionError):
    code = 'NOT_CALLABLE'

    def __init__(self, received: str, line=None, column=None):
        super().__init__(f"A {received} is not callable", line, column)


class InvalidLoopControl(ExecutionError):
    code = 'INVALID_LOOP_CTRL'

    def __init__(self, keyword: str, line=None, column=None):
        super().__init__(f"'{keyword}' used outside of a loop", line, column)


class ArgumentCount(ExecutionError):
    code = 'ARG_COUNT'

    def __init__(self, name: str, expected: int, received: int, line=None, column=None):
        super().__init__(f"{name} expects {expected} arguments but received {received}", line, column)


class StackOverflow(ExecutionError):
    code = 'STACK_OVERFLOW'

    def __init__(self, line=None, column=None):
        super().__init__("Program is nested too deeply to evaluate", line, column)

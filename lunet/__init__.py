# Lunet language package
# This package provides the lexer, parser and interpreter for the Lunet language.
from .errors import LunetError
from .interpreter import Interpreter, run_program, run_source
from .parser import parse_program

__all__ = [
    'run_source',
    'run_program',
    'parse_program',
    'Interpreter',
    'LunetError',
]

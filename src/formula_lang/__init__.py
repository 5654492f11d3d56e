"""
Formula Language Interpreter

Parses and evaluates single-line assignments such as ``B = (8/10) + A + 9``.
"""

from .main import run
from .parser import Parser, parse
from .lexer import Lexer, Token
from .interpreter import Interpreter
from .errors import (
    FormulaError, LexError, UnrecognizedCharacter, ParseError,
    UnexpectedEndOfInput, ExpectedToken, EvalError, UndefinedVariable,
    DivisionByZero, NumericOverflow
)

__version__ = "0.1.0"
__all__ = [
    "run", "parse", "Parser", "Lexer", "Token", "Interpreter",
    "FormulaError", "LexError", "UnrecognizedCharacter", "ParseError",
    "UnexpectedEndOfInput", "ExpectedToken", "EvalError", "UndefinedVariable",
    "DivisionByZero", "NumericOverflow",
]

import functools

from .lexer import Lexer, IDENT, INT, FLOAT, OPERATOR, EOF
from .token_stream import TokenStream
from .ast import BinaryExpr, UnaryExpr, Literal
from . import ast
from .errors import ParseError, UnexpectedEndOfInput, ExpectedToken

# Grammar:
#
#   statement  := IDENT "=" expression
#   expression := term (("+" | "-") expression)?
#   term       := factor (("*" | "/") term)?
#   factor     := INT | FLOAT | "(" expression ")" | "-" factor | IDENT
#
# expression and term recurse on their right operand, so "10-3-2" parses as
# "10-(3-2)" and "8/4/2" as "8/(4/2)".

FACTOR_START = "number, '(', '-' or identifier"


def _rule(name):
    """Records the grammar rule on any ParseError passing through it."""
    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            try:
                return method(self, *args, **kwargs)
            except ParseError as e:
                e.add_rule(name)
                raise
        return wrapper
    return decorator


# Parser converts a token list into an AST by recursive descent
class Parser:
    def __init__(self, tokens):
        self.stream = TokenStream(tokens)

    # Parses one complete statement; the whole token list must be consumed
    def parse(self):
        try:
            return self._statement()
        except RecursionError as e:
            raise ParseError("formula nested too deeply", self.stream.column(),
                             self.stream.text()) from e

    @_rule('statement')
    def _statement(self):
        if self.stream.advance() != IDENT:
            self._fail('identifier')
        target = Literal(self.stream.text(), ast.IDENTIFIER)

        if self.stream.advance() != OPERATOR or self.stream.text() != '=':
            self._fail("'='")

        value = self._expression()

        if self.stream.advance() != EOF:
            raise ExpectedToken('end of input', self.stream.text(), self.stream.column(),
                                message=f"unexpected trailing token {self.stream.text()!r}")
        return BinaryExpr('=', target, value)

    @_rule('expression')
    def _expression(self):
        left = self._term()
        if self._advance_if_operator('+', '-'):
            op = self.stream.text()
            return BinaryExpr(op, left, self._expression())
        return left

    @_rule('term')
    def _term(self):
        left = self._factor()
        if self._advance_if_operator('*', '/'):
            op = self.stream.text()
            return BinaryExpr(op, left, self._term())
        return left

    @_rule('factor')
    def _factor(self):
        kind = self.stream.advance()
        text = self.stream.text()

        if kind == INT:
            return Literal(text, ast.INTEGER)
        elif kind == FLOAT:
            return Literal(text, ast.FLOAT)
        elif kind == IDENT:
            return Literal(text, ast.IDENTIFIER)
        elif kind == OPERATOR and text == '(':
            expr = self._expression()
            if self.stream.advance() != OPERATOR or self.stream.text() != ')':
                self._fail("')'")
            return expr
        elif kind == OPERATOR and text == '-':
            return UnaryExpr('-', self._factor())
        self._fail(FACTOR_START)

    # Peeks at the next token; consumes it only if it is one of ops
    def _advance_if_operator(self, *ops):
        kind = self.stream.advance()
        if kind == OPERATOR and self.stream.text() in ops:
            return True
        self.stream.retreat()
        return False

    def _fail(self, wanted):
        if self.stream.kind() == EOF:
            raise UnexpectedEndOfInput(wanted, self.stream.column())
        raise ExpectedToken(wanted, self.stream.text(), self.stream.column())


def parse(source):
    """Lexes and parses a formula such as ``"B = (8/10) + A + 9"``."""
    return Parser(Lexer(source).tokenize()).parse()

import io
import csv
import math

from .ast import BinaryExpr, UnaryExpr, Literal, INTEGER, FLOAT, IDENTIFIER
from .errors import EvalError, UndefinedVariable, DivisionByZero, NumericOverflow


class Interpreter:
    def __init__(self, symbols=None):
        # Symbol table: variable name -> float
        self.symbols = {} if symbols is None else symbols

    def get_symbols_csv(self):
        """Returns the symbol table in CSV format.

        One ``name,value`` row per variable, sorted by name, without a header.

        Returns:
            str: CSV representation of the symbol table
        """
        output = io.StringIO()
        writer = csv.writer(output)
        for name, value in sorted(self.symbols.items()):
            writer.writerow([name, repr(value)])
        return output.getvalue()

    def interpret(self, statement):
        """Executes an assignment statement.

        The right-hand side is fully evaluated before the symbol table is
        touched, so a failing formula leaves it unchanged.

        Args:
            statement (BinaryExpr): The '=' node returned by the parser

        Returns:
            tuple: (assigned name, assigned value)
        """
        if not (isinstance(statement, BinaryExpr) and statement.op == '='):
            raise EvalError("statement must be an assignment")
        target = statement.left
        if not (isinstance(target, Literal) and target.kind == IDENTIFIER):
            raise EvalError("assignment target must be an identifier")

        value = self._evaluate_checked(statement.right)
        self.symbols[target.text] = value
        return target.text, value

    def _evaluate_checked(self, node):
        try:
            return self.evaluate(node)
        except RecursionError as e:
            raise EvalError("formula nested too deeply") from e

    def evaluate(self, node):
        """Evaluates an expression node and returns its value as a finite float."""
        if isinstance(node, Literal):
            return self._finite(self._eval_literal(node))
        elif isinstance(node, UnaryExpr):
            return -self.evaluate(node.operand)
        elif isinstance(node, BinaryExpr):
            if node.op == '=':
                raise EvalError("assignment is only allowed at the top level")
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            if node.op == '+':
                return self._finite(left + right)
            elif node.op == '-':
                return self._finite(left - right)
            elif node.op == '*':
                return self._finite(left * right)
            elif node.op == '/':
                if right == 0:
                    raise DivisionByZero()
                return self._finite(left / right)
            raise ValueError(f"Unknown operator: {node.op}")
        raise TypeError(f"Unknown AST node: {node!r}")

    def _finite(self, value):
        if not math.isfinite(value):
            raise NumericOverflow(f"result {value!r} is not a finite number")
        return value

    def _eval_literal(self, node):
        if node.kind == IDENTIFIER:
            if node.text not in self.symbols:
                raise UndefinedVariable(node.text)
            return float(self.symbols[node.text])
        elif node.kind in (INTEGER, FLOAT):
            try:
                return float(node.text)
            except ValueError as e:
                # The lexer only produces well-formed numbers
                raise RuntimeError(f"malformed numeric literal {node.text!r}") from e
        raise ValueError(f"Unknown literal kind: {node.kind}")

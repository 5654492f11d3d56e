# columnar.py
# Evaluates a formula across every row of a pyarrow Table. Identifiers name
# columns (or scalar constants), and the assigned name becomes a float64
# column of the returned table.

import logging
import math

import pyarrow as pa
import pyarrow.compute as pc

from .ast import BinaryExpr, UnaryExpr, Literal, IDENTIFIER, walk
from .errors import EvalError, UndefinedVariable, DivisionByZero, NumericOverflow
from .parser import parse

logger = logging.getLogger(__name__)


class ColumnEvaluator:
    """
    Tree-walking evaluator whose values are either Python floats (literals and
    constants) or float64 ChunkedArrays (columns and anything derived from one).
    """

    def __init__(self, table, constants=None):
        """
        :param table: The pyarrow.Table whose columns identifiers refer to.
        :param constants: Optional mapping of name -> number, consulted for
                          identifiers that are not column names.
        """
        self.table = table
        self.constants = constants or {}
        self.resolved = {}  # identifier -> float or float64 ChunkedArray

    def interpret(self, statement):
        """
        Evaluate an assignment statement.
        :return: (assigned name, float64 ChunkedArray with one value per row)
        """
        if not (isinstance(statement, BinaryExpr) and statement.op == '='):
            raise EvalError("statement must be an assignment")
        target = statement.left
        if not (isinstance(target, Literal) and target.kind == IDENTIFIER):
            raise EvalError("assignment target must be an identifier")

        try:
            self._resolve_names(statement.right)
            value = self.evaluate(statement.right)
        except RecursionError as e:
            raise EvalError("formula nested too deeply") from e
        if not isinstance(value, pa.ChunkedArray):
            if not math.isfinite(value):
                raise NumericOverflow(f"result {value!r} is not a finite number")
            value = pa.chunked_array(
                [pa.array([value] * self.table.num_rows, type=pa.float64())],
                type=pa.float64())
        elif pc.all(pc.is_finite(value)).as_py() is False:
            raise NumericOverflow("result is not a finite number in at least one row")
        return target.text, value

    def evaluate(self, node):
        """
        Evaluate an expression node. Identifiers are read from ``resolved``,
        which interpret() fills before walking the tree.
        """
        if isinstance(node, Literal):
            if node.kind == IDENTIFIER:
                if node.text not in self.resolved:
                    raise UndefinedVariable(node.text)
                return self.resolved[node.text]
            try:
                return float(node.text)
            except ValueError as e:
                raise RuntimeError(f"malformed numeric literal {node.text!r}") from e
        elif isinstance(node, UnaryExpr):
            value = self.evaluate(node.operand)
            if isinstance(value, float):
                return -value
            return pc.negate(value)
        elif isinstance(node, BinaryExpr):
            if node.op == '=':
                raise EvalError("assignment is only allowed at the top level")
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            if node.op == '/':
                self._check_divisor(right)
            if isinstance(left, float) and isinstance(right, float):
                return self._scalar_op(node.op, left, right)
            if node.op == '+':
                return pc.add(left, right)
            elif node.op == '-':
                return pc.subtract(left, right)
            elif node.op == '*':
                return pc.multiply(left, right)
            elif node.op == '/':
                return pc.divide(left, right)
            raise ValueError(f"Unknown operator: {node.op}")
        raise TypeError(f"Unknown AST node: {node!r}")

    def _resolve_names(self, node):
        names = sorted({n.text for n in walk(node)
                        if isinstance(n, Literal) and n.kind == IDENTIFIER})
        logger.debug("Formula references: %s", names)
        for name in names:
            self.resolved[name] = self._lookup(name)

    def _lookup(self, name):
        if name in self.table.column_names:
            column = self.table.column(name)
            if not _is_numeric(column.type):
                raise EvalError(f"column {name!r} of type {column.type} is not numeric")
            return pc.cast(column, pa.float64())
        if name in self.constants:
            return float(self.constants[name])
        raise UndefinedVariable(name)

    def _check_divisor(self, divisor):
        if isinstance(divisor, float):
            if divisor == 0:
                raise DivisionByZero()
        elif pc.any(pc.equal(divisor, 0.0)).as_py():
            raise DivisionByZero("division by zero in at least one row")

    def _scalar_op(self, op, left, right):
        if op == '+':
            return left + right
        elif op == '-':
            return left - right
        elif op == '*':
            return left * right
        elif op == '/':
            return left / right
        raise ValueError(f"Unknown operator: {op}")


def _is_numeric(arrow_type):
    return (pa.types.is_integer(arrow_type) or pa.types.is_floating(arrow_type)
            or pa.types.is_decimal(arrow_type) or pa.types.is_boolean(arrow_type))


def evaluate_table(code, table, constants=None):
    """
    Evaluate a formula such as ``"total = price * qty"`` for every row of table.
    :param code: One line of formula source.
    :param table: A pyarrow.Table.
    :param constants: Optional mapping of name -> number for non-column identifiers.
    :return: A new pyarrow.Table with the assigned column appended, or replaced
             when a column of that name already exists.
    """
    tree = parse(code)
    name, values = ColumnEvaluator(table, constants).interpret(tree)
    logger.debug("Assigning column %r (%d rows)", name, len(values))
    if name in table.column_names:
        index = table.column_names.index(name)
        return table.set_column(index, pa.field(name, pa.float64()), values)
    return table.append_column(pa.field(name, pa.float64()), values)

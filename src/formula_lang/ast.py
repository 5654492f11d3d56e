# Abstract Syntax Tree (AST) node classes
# The parser builds a strict tree of these; consumers dispatch on the three
# concrete classes and treat anything else as an error.

# Literal kinds
INTEGER = 'INTEGER'
FLOAT = 'FLOAT'
IDENTIFIER = 'IDENTIFIER'

# Binding strength of the binary operators, '=' loosest
PRECEDENCE = {'=': 0, '+': 1, '-': 1, '*': 2, '/': 2}


class Node:
    __slots__ = ()

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None


# Represents a binary operation (e.g., a + b) or, at the root, an assignment
class BinaryExpr(Node):
    __slots__ = ('op', 'left', 'right')

    def __init__(self, op, left, right):
        if op not in PRECEDENCE:
            raise ValueError(f"unknown binary operator: {op!r}")
        self.op = op        # One of = + - * /
        self.left = left
        self.right = right

    def __repr__(self):
        return f"BinaryExpr({self.op!r}, {self.left!r}, {self.right!r})"

    def __str__(self):
        return f"op({self.op}) lhs({self.left}) rhs({self.right})"


# Represents unary negation (e.g., -x)
class UnaryExpr(Node):
    __slots__ = ('op', 'operand')

    def __init__(self, op, operand):
        if op != '-':
            raise ValueError(f"unknown unary operator: {op!r}")
        self.op = op
        self.operand = operand

    def __repr__(self):
        return f"UnaryExpr({self.op!r}, {self.operand!r})"

    def __str__(self):
        return f"op({self.op}) rhs({self.operand})"


# Represents a number or an identifier, kept as source text until evaluation
class Literal(Node):
    __slots__ = ('text', 'kind')

    def __init__(self, text, kind):
        if kind not in (INTEGER, FLOAT, IDENTIFIER):
            raise ValueError(f"unknown literal kind: {kind!r}")
        self.text = text
        self.kind = kind

    def __repr__(self):
        return f"Literal({self.text!r}, {self.kind})"

    def __str__(self):
        return f"val({self.text}) type({self.kind})"


def to_infix(node):
    """Renders a tree back to formula text that parses to an equal tree.

    The grammar nests ``+ -`` and ``* /`` to the right, so a right operand of
    the same precedence needs no parentheses while a left one does.
    """
    if isinstance(node, Literal):
        return node.text
    elif isinstance(node, UnaryExpr):
        operand = to_infix(node.operand)
        if isinstance(node.operand, BinaryExpr):
            operand = f"({operand})"
        return f"{node.op}{operand}"
    elif isinstance(node, BinaryExpr):
        if node.op == '=':
            if not (isinstance(node.left, Literal) and node.left.kind == IDENTIFIER):
                raise ValueError("assignment target must be an identifier")
            return f"{node.left.text} = {_operand(node.right, 0, False)}"
        level = PRECEDENCE[node.op]
        left = _operand(node.left, level, True)
        right = _operand(node.right, level, False)
        return f"{left} {node.op} {right}"
    raise TypeError(f"unknown AST node: {node!r}")


def _operand(node, level, is_left):
    text = to_infix(node)
    if isinstance(node, BinaryExpr):
        if node.op == '=':
            raise ValueError("assignment is only allowed at the root")
        inner = PRECEDENCE[node.op]
        if inner < level or (is_left and inner == level):
            return f"({text})"
    return text


def walk(node):
    """Yields every node of the tree in pre-order."""
    yield node
    if isinstance(node, BinaryExpr):
        yield from walk(node.left)
        yield from walk(node.right)
    elif isinstance(node, UnaryExpr):
        yield from walk(node.operand)
    elif not isinstance(node, Literal):
        raise TypeError(f"unknown AST node: {node!r}")

# Exception hierarchy for the formula language.
# Every error raised for bad user input derives from FormulaError and knows
# the source column it points at (None when there is no single column).


class FormulaError(Exception):
    """Base exception for all formula errors."""

    column = None


# Raised by the lexer for characters outside the formula alphabet
class LexError(FormulaError):
    pass


class UnrecognizedCharacter(LexError):
    def __init__(self, char, column):
        self.char = char      # Offending character
        self.column = column  # 1-based source column
        super().__init__(f"unrecognized character {char!r} at column {column}")


class ParseError(FormulaError):
    """Grammar violation.

    ``rules`` lists the grammar rules the error propagated through, innermost
    first, e.g. ``['factor', 'term', 'expression', 'statement']``.
    """

    def __init__(self, message, column, text):
        self.message = message
        self.column = column
        self.text = text
        self.rules = []
        super().__init__(message)

    def add_rule(self, rule):
        self.rules.append(rule)

    def __str__(self):
        result = f"{self.message} at column {self.column}"
        if self.rules:
            result += f" (in {' <- '.join(self.rules)})"
        return result


class UnexpectedEndOfInput(ParseError):
    def __init__(self, wanted, column):
        self.wanted = wanted
        super().__init__(f"unexpected end of input, need {wanted}", column, "")


class ExpectedToken(ParseError):
    def __init__(self, wanted, got, column, message=None):
        self.wanted = wanted  # Description of what the rule needed
        self.got = got        # Literal text of the token actually found
        if message is None:
            message = f"invalid token {got!r}, need {wanted}"
        super().__init__(message, column, got)


class EvalError(FormulaError):
    pass


class UndefinedVariable(EvalError, NameError):
    def __init__(self, name):
        super().__init__(f"variable {name!r} is not defined")
        self.name = name  # NameError.__init__ resets .name


class DivisionByZero(EvalError, ZeroDivisionError):
    def __init__(self, message="division by zero"):
        super().__init__(message)


class NumericOverflow(EvalError, OverflowError):
    def __init__(self, message="result is not a finite number"):
        super().__init__(message)

import re
from collections import namedtuple

from .errors import UnrecognizedCharacter

# Token kinds
IDENT = 'IDENT'
INT = 'INT'
FLOAT = 'FLOAT'
OPERATOR = 'OPERATOR'
EOF = 'EOF'
BOF = 'BOF'  # Start marker, only ever produced by TokenStream

OPERATORS = '=+-*/()'
DIGITS = '0123456789'

_NUMBER_RE = re.compile(r'(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?', re.ASCII)
_IDENT_RE = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')


# Token represents a single lexeme with the 1-based column it starts at
class Token(namedtuple('Token', ['kind', 'text', 'column'])):
    __slots__ = ()

    def __str__(self):
        return f"Token({self.kind}, {self.text!r}, col={self.column})"


# Lexer breaks a single formula line down into tokens
class Lexer:
    def __init__(self, text):
        self.text = text    # Source line, not stripped so columns stay exact
        self.pos = 0        # Current index into text
        self.tokens = []

    @property
    def column(self):
        return self.pos + 1

    # Tokenizes the whole line eagerly and appends the EOF token
    def tokenize(self):
        while self.pos < len(self.text):
            char = self.text[self.pos]

            if char.isspace():
                self.pos += 1
            elif char in DIGITS or (char == '.' and self._peek() in DIGITS):
                self.tokens.append(self._number())
            elif char.isalpha() or char == '_':
                self.tokens.append(self._identifier())
            elif char in OPERATORS:
                self.tokens.append(Token(OPERATOR, char, self.column))
                self.pos += 1
            else:
                raise UnrecognizedCharacter(char, self.column)

        self.tokens.append(Token(EOF, '', self.column))
        return self.tokens

    def _peek(self):
        if self.pos + 1 < len(self.text):
            return self.text[self.pos + 1]
        return ' '

    def _number(self):
        match = _NUMBER_RE.match(self.text, self.pos)
        text = match.group(0)
        # A decimal point or an exponent makes it a float
        kind = FLOAT if ('.' in text or match.group(2)) else INT
        token = Token(kind, text, self.column)
        self.pos = match.end()
        return token

    def _identifier(self):
        match = _IDENT_RE.match(self.text, self.pos)
        if match is None:
            # isalpha() accepted a non-ASCII letter
            raise UnrecognizedCharacter(self.text[self.pos], self.column)
        token = Token(IDENT, match.group(0), self.column)
        self.pos = match.end()
        return token


def tokenize(text):
    return Lexer(text).tokenize()

from .lexer import Token, BOF, EOF


class TokenStream:
    """Cursor over a lexed token list with one step of pushback.

    The cursor starts on a BOF marker placed before the first real token, so
    the first ``advance()`` yields the first token of the formula. The list
    always ends with an EOF token and the cursor never moves past it.
    """

    def __init__(self, tokens):
        if not tokens or tokens[-1].kind != EOF:
            raise ValueError("token list must end with an EOF token")
        self.tokens = [Token(BOF, '', 0)] + list(tokens)
        self.index = 0

    def current(self):
        return self.tokens[self.index]

    def kind(self):
        return self.tokens[self.index].kind

    def text(self):
        return self.tokens[self.index].text

    def column(self):
        return self.tokens[self.index].column

    def position(self):
        return self.index

    def advance(self):
        """Moves to the next token and returns its kind; a no-op at EOF."""
        if self.index < len(self.tokens) - 1:
            self.index += 1
        return self.tokens[self.index].kind

    def retreat(self):
        """Undoes the last advance."""
        if self.index == 0:
            raise IndexError("cannot retreat past the start of the token stream")
        self.index -= 1

    def __repr__(self):
        return f"TokenStream(index={self.index}, current={self.current()})"

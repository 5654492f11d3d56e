import logging

from .lexer import Lexer
from .parser import Parser
from .interpreter import Interpreter

logger = logging.getLogger(__name__)


def run(code, symbols=None):
    """Run a single formula such as ``"B = (8/10) + A + 9"``.

    Args:
        code (str): One line of source text
        symbols (dict): Optional symbol table to read variables from and
            store the result in; a fresh one is used when omitted

    Returns:
        tuple: (assigned name, assigned value)

    Raises:
        FormulaError: on a lexing, parsing or evaluation failure
    """
    logger.debug("Input code: %s", code)

    logger.debug("Tokenizing...")
    tokens = Lexer(code).tokenize()
    logger.debug("Tokens: %s", [str(t) for t in tokens])

    logger.debug("Parsing...")
    tree = Parser(tokens).parse()
    logger.debug("AST: %s", tree)

    logger.debug("Interpreting...")
    interpreter = Interpreter(symbols)
    name, value = interpreter.interpret(tree)
    logger.debug("Symbols:\n%s", interpreter.get_symbols_csv())
    return name, value

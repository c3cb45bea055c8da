from lark import Lark
from lark import Transformer

"""
This file defines the core parsing logic for the instruction language.

`DSLParser` is responsible for loading a Lark grammar and converting raw
instruction text into a parse tree.

`DSLTransformer` is a base class for transforming the Lark parse tree into
structured Python objects. It also collects the diagnostics a transformation
produces, so that callers can report them without the parse failing.
"""

class DSLParser():
    def __init__(self, grammar_file: str, start_symbol: str):
        """
        Initialize the parser by loading the grammar and setting up Lark.

        :param grammar_file: Path to the Lark grammar file
        :param start_symbol: The start symbol for grammar parsing
        """
        with open(grammar_file, 'r', encoding='utf-8') as f:
            grammar = f.read()

        # Terminal priorities resolve number/operator/word collisions, which
        # requires the contextual lexer of the LALR parser
        self.parser = Lark(grammar, start=start_symbol, parser='lalr', lexer='contextual',
                           maybe_placeholders=False, propagate_positions=False)

    def parse(self, code: str):
        """
        Parse the given text and return the Lark parse tree.

        :param code: Instruction text as a string
        :return: The resulting parse tree
        """
        tree = self.parser.parse(code)
        return tree

class DSLTransformer(Transformer):
    """
    A generic base transformer based on Lark's Transformer.
    Subclasses implement the rule callbacks and report problems
    through `warn` instead of raising.
    """
    def __init__(self):
        super().__init__()
        self.warnings = []

    def warn(self, message: str):
        """Record a diagnostic for the current transformation."""
        self.warnings.append(message)

    def reset(self):
        """Forget diagnostics from a previous transformation."""
        self.warnings = []

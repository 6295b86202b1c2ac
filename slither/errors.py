"""Host-level exceptions.

Language-level failures are ``Error`` values and never raised; these classes
cover the plumbing around the core (parsing source text, the command line).
"""


class SlitherError(Exception):
    """ Base class for all Slither errors"""
    pass


class SlitherSyntaxError(SlitherError):
    """ Raised when source text does not match the grammar"""

    def __init__(self, message: str, source: str = "<stdin>", line: int = 1, column: int = 1):
        super().__init__(f"{source}:{line}:{column}: error: {message}")
        self.source = source
        self.line = line
        self.column = column

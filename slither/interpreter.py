from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from slither.builtin.env_builtin import register
from slither.config import get_prelude_path
from slither.evaluation.evaluator import evaluate_form
from slither.reader.parser import Node, parse, parse_file
from slither.reader.reader import read
from slither.types.environment import Environment
from slither.types.values import Error, String, Value

logger = logging.getLogger(__name__)

# Each Slither call takes several Python frames; the default limit of 1000
# stops recursion at about a hundred levels.
RECURSION_LIMIT = 10000


class Interpreter:
    """
    A Slither session: one root environment holding the builtins, the prelude
    and every global definition made through it.
    """

    def __init__(
        self,
        prelude: bool | str | Path = True,
        parse_source: Callable[[str, str], Node] = parse,
        parse_unit: Callable[[Path], Node] = parse_file,
    ):
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)

        self.env = Environment()
        self.parse_source = parse_source
        register(self.env, parse_unit)
        self._load = self.env.get("load").fn

        if prelude:
            path = get_prelude_path() if prelude is True else Path(prelude)
            self.load_prelude(path)

    def load_prelude(self, path: Path) -> None:
        """Load a prelude file, printing the error if it cannot be loaded."""
        logger.debug("Loading prelude %s", path)
        result = self.load(path)
        if isinstance(result, Error):
            print(result)

    def load(self, path: str | Path) -> Value:
        """Load a source unit into the root environment, like the `load` builtin."""
        return self._load(self.env, [String(str(path))])

    def eval(self, code: str, name: str = "<stdin>") -> Value:
        """Evaluate one input; the whole input is reduced as a single S-expression.

        Raises SlitherSyntaxError if the input does not parse.
        """
        return evaluate_form(read(self.parse_source(code, name)), self.env)

    def eval_forms(self, code: str, name: str = "<stdin>") -> list[Value]:
        """Evaluate each top-level form of `code` separately, in order."""
        program = read(self.parse_source(code, name))
        return [evaluate_form(form, self.env) for form in program]

    def lookup(self, name: str) -> Optional[Value]:
        value = self.env.get(name)
        return None if isinstance(value, Error) else value

"""Command line entry point: run files, or an interactive prompt."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from slither import __version__
from slither.errors import SlitherSyntaxError
from slither.interpreter import Interpreter
from slither.types.values import Error

try:
    # Line editing and history for the prompt.
    import readline  # noqa: F401
except ImportError:
    readline = None

logger = logging.getLogger(__name__)

PROMPT = "slither> "


def repl(interp: Interpreter) -> None:
    print(f"Slither version {__version__}")
    print("Press ctrl+c to exit\n")

    while True:
        try:
            line = input(PROMPT)
        except (KeyboardInterrupt, EOFError):
            print()
            break

        try:
            result = interp.eval(line)
        except SlitherSyntaxError as err:
            print(err)
            continue
        print(result)


def run(interp: Interpreter, paths: Sequence[str]) -> int:
    status = 0
    for path in paths:
        logger.debug("Running %s", path)
        result = interp.load(path)
        if isinstance(result, Error):
            print(result)
            status = 1
    return status


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="slither", description="Slither Lisp interpreter")
    parser.add_argument("files", nargs="*", help="source files to load, in order")
    parser.add_argument("--no-prelude", action="store_true", help="do not load the standard prelude")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    interp = Interpreter(prelude=not args.no_prelude)
    if args.files:
        return run(interp, args.files)
    repl(interp)
    return 0

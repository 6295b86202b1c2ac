# Slither: a small Lisp with S-expressions, Q-expressions and curried closures.
#
# Package layout:
# - slither.types:      runtime values and the environment chain.
# - slither.reader:     source parser (syntax tree) and the tree -> value reader.
# - slither.evaluation: the evaluator and the function application engine.
# - slither.builtin:    the builtin catalog registered into the root environment.

__version__ = "0.1.1"

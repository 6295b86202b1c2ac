from slither.reader.parser import Node, lex, parse, parse_file
from slither.reader.reader import read

__all__ = ["Node", "lex", "parse", "parse_file", "read"]

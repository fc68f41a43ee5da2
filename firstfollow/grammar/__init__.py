"""Grammar model, text-format parser and writer."""

from .model import EMPTY, Rule, Grammar
from .loader import load_grammar_text
from .parser import parse_grammar
from .writer import quote, format_symbol, format_set, format_sequence, format_rule, dump_grammar

# Xpanda package
# Shell-style parameter expansion ($VAR, ${VAR:-default}, ${#VAR}, ...) for arbitrary text.
from .errors import XpandaError, ParseError, EvalError, VarSyntaxError, VarFileError
from .expander import Xpanda, Builder, expand

__version__ = '0.1.0'

__all__ = [
    'Xpanda',
    'Builder',
    'expand',
    'XpandaError',
    'ParseError',
    'EvalError',
    'VarSyntaxError',
    'VarFileError',
]

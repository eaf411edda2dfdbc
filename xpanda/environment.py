from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from xpanda.ast import Identifier, Named, Indexed


class Environment:
    """Read-only variable store shared by every expansion of a session.

    Holds named variables, positional variables (1-based for lookups) and
    the `no_unset` flag. Nothing is mutated after construction, so one
    instance may be used from several threads at once.
    """
    def __init__(self, named_vars: Optional[Mapping[str, str]] = None,
                 positional_vars: Optional[Iterable[str]] = None,
                 no_unset: bool = False):
        self.named_vars: Mapping[str, str] = MappingProxyType(dict(named_vars or {}))
        self.positional_vars: Tuple[str, ...] = tuple(positional_vars or ())
        self.no_unset = no_unset

    @property
    def arity(self) -> int:
        return len(self.positional_vars)

    def resolve(self, identifier: Identifier) -> Optional[str]:
        """Return the value of the identifier, or None if it is unset."""
        if isinstance(identifier, Named):
            return self.named_vars.get(identifier.name)
        if isinstance(identifier, Indexed):
            if identifier.index == 0:
                return ' '.join(self.positional_vars)
            if identifier.index <= len(self.positional_vars):
                return self.positional_vars[identifier.index - 1]
            return None
        raise TypeError(f"unsupported identifier {identifier!r}")

"""Scalar mapping between GraphQL scalars and C# types.

The five standard GraphQL scalars map to built-in C# types. Custom scalars
(or overrides of the standard ones) come from a ``Key=Val,...`` string:

    scalar_map = ScalarMap.from_argument("ID=Guid,Date=DateTime")
    scalar_map.resolve("ID")      # "Guid"
    scalar_map.resolve("Int")     # "int"
    scalar_map.resolve("Decimal") # "Decimal" (unmapped, passed through)
"""

import logging
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

BUILTIN_SCALARS = MappingProxyType({
    "String": "string",
    "ID": "string",
    "Int": "int",
    "Float": "double",
    "Boolean": "bool",
})


def split_multi_value_argument(arg: str | None) -> dict[str, str]:
    """Split an argument like ``"key1=v1,key2=v2"`` into a dict.

    Very simple splitter: values can't contain commas or equal signs.
    Pairs without an ``=`` are dropped rather than treated as errors.
    """
    if not arg:
        return {}

    result = {}
    for pair in arg.split(","):
        parts = pair.split("=")
        if len(parts) < 2:
            logger.debug("Ignoring malformed key=value pair %r", pair)
            continue
        result[parts[0]] = parts[1]
    return result


class ScalarMap:
    """Read-only mapping from GraphQL scalar name to C# type name.

    Built once per run and handed to whichever schema parser runs.
    """

    def __init__(self, overrides: Mapping[str, str] | None = None):
        mapping = dict(BUILTIN_SCALARS)
        if overrides:
            mapping.update(overrides)
        self._mapping = MappingProxyType(mapping)

    @classmethod
    def from_argument(cls, arg: str | None) -> "ScalarMap":
        """Build a map from a ``"GqlType=DotNetType,..."`` command-line value."""
        return cls(split_multi_value_argument(arg))

    def resolve(self, scalar_name: str) -> str:
        """Return the C# type for a scalar, or the scalar's own name if unmapped."""
        return self._mapping.get(scalar_name, scalar_name)

    def is_known(self, scalar_name: str) -> bool:
        """Check whether the scalar is built in or explicitly mapped."""
        return scalar_name in self._mapping

    def as_dict(self) -> dict[str, str]:
        return dict(self._mapping)

    def __repr__(self) -> str:
        return f"ScalarMap({dict(self._mapping)!r})"

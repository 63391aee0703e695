"""Deterministic ordering of class and interface methods."""

from ts2jsdoc.locale_sort_key import locale_sort_key
from ts2jsdoc.models import MethodDescriptor

MUTATOR_PREFIXES = ("get", "set")


def trim_mutator_prefix(name: str) -> str:
    """Strip a get/set prefix so paired accessors sort next to each other.

    ``getFeedURL`` and ``setFeedURL`` both become ``feedURL``.
    """
    if len(name) > 4 and name[3].isupper() and name.startswith(MUTATOR_PREFIXES):
        return name[3].lower() + name[4:]
    return name


def sort_methods(methods: list[MethodDescriptor]) -> list[MethodDescriptor]:
    """Return methods with protected ones last, each tier in name order."""
    return sorted(
        methods,
        key=lambda m: (m.is_protected, locale_sort_key(trim_mutator_prefix(m.name))),
    )

"""
Get-or-create access to values in a tree of nested mappings.

Every accessor in ReceiptStore goes through these two functions, so the
receipts document never needs ad hoc nested-key traversal.
"""

from typing import Any, Hashable, MutableMapping


class _Missing:
    """Sentinel returned by seek() when a path does not exist."""

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISSING"


MISSING = _Missing()


def seek(root: Any, *keys: Hashable) -> Any:
    """
    Return the value stored at the nested path given by keys.

    Returns MISSING if any key along the path is absent, or if an
    intermediate value is not a mapping. Never raises for a missing path.
    """
    level = root
    for key in keys:
        if not isinstance(level, MutableMapping) or key not in level:
            return MISSING
        level = level[key]
    return level


def set_or_create(root: MutableMapping, value: Any, *keys: Hashable) -> Any:
    """
    Assign value at the nested path given by keys and return it.

    Missing intermediate keys are created as empty dicts (insertion ordered).
    """
    if not keys:
        raise ValueError("set_or_create needs at least one key")
    level = root
    for key in keys[:-1]:
        if key not in level:
            level[key] = {}
        level = level[key]
    level[keys[-1]] = value
    return value

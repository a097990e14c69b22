"""Identifier case conversion for demoting exported Go names."""

from __future__ import annotations


def to_unexported(name: str) -> str:
    """Return ``name`` with its leading capital run lowercased.

    A leading acronym keeps the capital that opens the following word:

    - ``MyFunc`` -> ``myFunc``
    - ``HTTPServer`` -> ``httpServer`` (not ``hTTPServer``)
    - ``APIURLPath`` -> ``apiurlPath``
    - ``ID`` -> ``id``
    - ``HTTPs`` -> ``https`` (a single trailing lowercase letter is not a word)
    """
    if not name:
        return name
    if len(name) == 1:
        return name.lower()

    first_lower = next((i for i, char in enumerate(name) if not char.isupper()), -1)
    if first_lower == -1:
        return "".join(char.lower() for char in name)

    to_lower = first_lower
    # The last capital before the transition starts the next word, unless the
    # lowercase character is the final one.
    if first_lower > 1 and name[first_lower - 1].isupper() and first_lower < len(name) - 1:
        to_lower -= 1

    return "".join(char.lower() for char in name[:to_lower]) + name[to_lower:]


__all__ = ["to_unexported"]

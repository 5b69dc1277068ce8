"""Dotted-path traversal of a phrase tree."""

from collections.abc import Mapping
from typing import Any

PATH_SEPARATOR = "."


def resolve_path(tree: Mapping[str, Any], path: str) -> str | None:
    """Walk `path` through `tree` and return the terminal phrase.

    A segment is valid when it is a key of the current node and either
    maps to a nested mapping with more segments to come, or maps to a
    string and is the last segment. Any other segment makes the whole
    path invalid and None is returned. Addressing an internal node or
    going past a terminal string are both invalid.

    Example:
        resolve_path({"greetings": {"hello": "Hi"}}, "greetings.hello")
        # Returns: "Hi"
    """
    segments = path.split(PATH_SEPARATOR)
    last = len(segments) - 1
    node: Mapping[str, Any] = tree

    for index, segment in enumerate(segments):
        if segment not in node:
            return None
        value = node[segment]
        if isinstance(value, str):
            return value if index == last else None
        if isinstance(value, Mapping) and index != last:
            node = value
            continue
        return None

    return None

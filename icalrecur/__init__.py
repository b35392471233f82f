"""
.. include:: ../README.md
"""

__all__ = [
    "compat",
    "exceptions",
    "iter",
    "parsing",
    "recurrence",
    "types",
    "util",
]

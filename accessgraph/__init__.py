"""Authorization core: group closure, permission evaluation and access policy."""

__version__ = "0.1.0"

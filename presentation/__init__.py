"""Presentation layer - command line interface."""
from .cli import KeysCommand, LookupCommand

__all__ = [
    "KeysCommand",
    "LookupCommand",
]

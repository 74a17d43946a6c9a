"""Presentation CLI exports."""
from .lookup_command import LookupCommand, add_lookup_parser
from .keys_command import KeysCommand, add_keys_parser

__all__ = [
    "LookupCommand",
    "add_lookup_parser",
    "KeysCommand",
    "add_keys_parser",
]

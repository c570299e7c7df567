"""Keyword-driven schema mapping."""

from .mapper import SchemaMapper
from .rules import DEFAULT_RULES, FieldRule

__all__ = [
    "DEFAULT_RULES",
    "FieldRule",
    "SchemaMapper",
]

"""
Parsing Package

Response parsing and error classification.
"""

from src.parsing.api_errors import parse_api_error
from src.parsing.parser import MAX_EXCERPT_CHARS, excerpt, parse, parse_status, read_body

__all__ = [
    "MAX_EXCERPT_CHARS",
    "excerpt",
    "parse",
    "parse_api_error",
    "parse_status",
    "read_body",
]

"""External content: condition sources and the resolver that reads them."""

from envali.validators.content.conditions import ExternalCondition
from envali.validators.content.loader import JsonContentSource, load_content_file, parse_content
from envali.validators.content.resolver import ContentResolver
from envali.validators.content.sources import ContentSource, InMemoryContentSource

__all__ = [
    "ContentResolver",
    "ContentSource",
    "ExternalCondition",
    "InMemoryContentSource",
    "JsonContentSource",
    "load_content_file",
    "parse_content",
]

"""
restplate.template – Template parsing and expansion.

uri_utils is imported first: collection_format reads it while query_template
is still loading.
"""
from . import uri_utils
from .chunks import Expression, Literal, TemplateChunk
from .tokenizer import ChunkTokenizer, tokenize
from .expressions import parse as parse_expression
from .template import Template
from .uri_template import UriTemplate
from .query_template import QueryTemplate
from .header_template import HeaderTemplate
from .body_template import BodyTemplate

__all__ = [
    "uri_utils",
    "Expression",
    "Literal",
    "TemplateChunk",
    "ChunkTokenizer",
    "tokenize",
    "parse_expression",
    "Template",
    "UriTemplate",
    "QueryTemplate",
    "HeaderTemplate",
    "BodyTemplate",
]

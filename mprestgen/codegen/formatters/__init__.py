"""Source formatters applied by the post-processing sweep."""

from mprestgen.codegen.formatters.base import Formatter
from mprestgen.codegen.formatters.google_java_format import GoogleJavaFormatter

__all__ = [
    'Formatter',
    'GoogleJavaFormatter',
]

import re
import unicodedata
from urllib.parse import urlparse

__all__ = (
    'is_url',
    'camelize',
    'sanitize_name',
    'java_identifier',
    'java_constant',
)

JAVA_KEYWORDS = frozenset(
    {
        'abstract', 'assert', 'boolean', 'break', 'byte', 'case', 'catch',
        'char', 'class', 'const', 'continue', 'default', 'do', 'double',
        'else', 'enum', 'extends', 'false', 'final', 'finally', 'float',
        'for', 'goto', 'if', 'implements', 'import', 'instanceof', 'int',
        'interface', 'long', 'native', 'new', 'null', 'package', 'private',
        'protected', 'public', 'return', 'short', 'static', 'strictfp',
        'super', 'switch', 'synchronized', 'this', 'throw', 'throws',
        'transient', 'true', 'try', 'void', 'volatile', 'while',
    }
)  # fmt: skip


def capitalize(input_string):
    if not input_string:
        return ''
    return input_string[0].upper() + input_string[1:]


def is_url(text):
    try:
        result = urlparse(text)
        return all([result.scheme, result.netloc])
    except ValueError:
        return False


def remove_accents(input_str):
    nfkd_form = unicodedata.normalize('NFKD', input_str)
    return ''.join(c for c in nfkd_form if not unicodedata.combining(c))


def camelize(text: str, lower_first: bool = False) -> str:
    """Convert text to CamelCase.

    Underscores, hyphens, dots, slashes and whitespace separate words; the
    first letter of every word is upper-cased and the rest is kept as is,
    so ``petStore`` and ``pet_store`` both become ``PetStore``.

    An empty input yields an empty string.
    """
    if not text:
        return ''
    parts = re.split(r'[_\-\s./]+', text)
    result = ''.join(capitalize(part) for part in parts if part)
    if lower_first and result:
        result = result[0].lower() + result[1:]
    return result


def sanitize_name(name: str) -> str:
    """Strip characters that cannot appear in a Java identifier.

    - Replace spaces, hyphens and dots with underscores
    - Remove every other character outside ``[A-Za-z0-9_]``
    """
    if not name:
        return ''
    sanitized = re.sub(r'[-\s.]+', '_', remove_accents(name))
    return re.sub(r'[^A-Za-z0-9_]', '', sanitized)


def java_identifier(name: str, fallback: str = 'value') -> str:
    """Convert a wire name into a lowerCamel Java identifier.

    - Sanitize and camelize the name
    - Prefix names starting with a digit, or Java keywords, with ``_``
    """
    identifier = camelize(sanitize_name(name), lower_first=True)
    if not identifier:
        return fallback
    if identifier[0].isdigit() or identifier in JAVA_KEYWORDS:
        identifier = '_' + identifier
    return identifier


def java_constant(value) -> str:
    """Convert an enum value into an UPPER_SNAKE Java constant name."""
    text = remove_accents(str(value))
    text = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', text)
    text = re.sub(r'[^A-Za-z0-9]+', '_', text).strip('_').upper()
    if not text:
        return 'EMPTY'
    if text[0].isdigit():
        text = '_' + text
    return text

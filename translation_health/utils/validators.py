"""Validation utilities."""

import re

# Right-to-left scripts (ISO 639-1 / 639-2 base codes)
RTL_LANGUAGES = frozenset({'ar', 'he', 'fa', 'ur', 'yi', 'ps', 'sd', 'ug', 'dv', 'ku'})

_LOCALE_PATTERN = re.compile(r'^[a-z]{2,3}(-[A-Za-z]{2,4})?$')

# Comprehensive emoji pattern
_EMOJI_PATTERN = re.compile(
    r'[\U0001F300-\U0001F9FF'  # Misc Symbols & Pictographs, Emoticons, etc.
    r'\U0001F600-\U0001F64F'   # Emoticons
    r'\U0001F680-\U0001F6FF'   # Transport & Map
    r'\U0001FA70-\U0001FAFF'   # Symbols & Pictographs Extended-A
    r'\U00002600-\U000026FF'   # Misc symbols
    r'\U00002700-\U000027BF'   # Dingbats
    r'\U0001F1E0-\U0001F1FF'   # Flags
    r'\U00002300-\U000023FF'   # Misc Technical
    r'\U0000FE00-\U0000FE0F'   # Variation Selectors
    r'\U0000200D'              # Zero width joiner
    r']+'
)

_EXCLUDE_PATTERNS = [re.compile(p) for p in (
    r'^[0-9\s\.\,\-\+\*\/\=\<\>%:]+$',  # Numbers/operators only
    r'^(https?://|www\.|mailto:)',  # URLs
    r'^/[\w\-/\.\[\]]*$',  # Route paths
    r'^[A-Z][A-Z0-9_]+$',  # CONSTANTS
    r'^\$\d+',  # Currency
    r'^%[@dfs]',  # Format specifiers
    r'^\{\{?\s*\w+\s*\}?\}$',  # Placeholders
    r'^\.{3,}$',  # Ellipsis
    r'^\s*$',  # Whitespace only
    r'^[a-z]+(\.[a-zA-Z0-9_]+)+$',  # Dotted identifiers like "common.save"
    r'^[a-z]+[A-Z]\w*$',  # camelCase identifiers
    r'^[a-z0-9]+(_[a-z0-9]+)+$',  # snake_case identifiers
    r'^[a-z0-9]+(-[a-z0-9]+)+$',  # kebab-case tokens
    r'^#[0-9a-fA-F]{3,8}$',  # Hex colors
    r'^[A-Za-z0-9+/=]{32,}$',  # Long hashes/tokens
    r'^HH:mm|^dd/MM|^yyyy|^EEEE',  # Date formats
)]

# Utility-first CSS tokens (Tailwind style) and BEM class names
_CSS_TOKEN = re.compile(
    r'^-?([a-z]+:)*-?[a-z][a-z0-9]*(-[a-z0-9./\[\]#%]+)*$'
)
_STANDALONE_UTILITIES = frozenset({
    'flex', 'grid', 'block', 'inline', 'hidden', 'relative', 'absolute', 'fixed',
    'sticky', 'container', 'truncate', 'underline', 'italic', 'uppercase', 'lowercase',
})


def is_valid_locale_code(code: str) -> bool:
    """
    Validate locale code.

    Examples: en, tr, es, pt-BR, zh-Hans
    """
    if not code or not isinstance(code, str):
        return False
    return bool(_LOCALE_PATTERN.match(code))


def base_language(locale: str) -> str:
    """Language part of a locale: "ar-EG" -> "ar"."""
    return re.split(r'[-_]', locale or '', maxsplit=1)[0].lower()


def is_rtl_locale(locale: str) -> bool:
    """True when the locale is written right-to-left."""
    return base_language(locale) in RTL_LANGUAGES


def sanitize_key_name(text: str, prefix: str = 'text') -> str:
    """
    Generate a valid key name from text.

    Args:
        text: Original text
        prefix: Key prefix (e.g., 'button', 'label')

    Returns:
        Valid key name
    """
    # Remove special characters
    clean_text = re.sub(r'[^\w\s]', '', text.lower())

    # Split into words and take first 4
    words = clean_text.split()[:4]

    if not words:
        words = ['unnamed']

    return '.'.join([prefix] + words)


def is_pure_emoji(text: str) -> bool:
    return not _EMOJI_PATTERN.sub('', text.strip())


def looks_like_css_classes(text: str) -> bool:
    """
    Check whether text is a class list such as "flex items-center gap-2".

    Every whitespace separated token must look like a CSS class and at
    least half of them must be hyphenated, variant-prefixed or a known
    standalone utility.
    """
    tokens = text.split()
    if not tokens:
        return False
    if not all(_CSS_TOKEN.match(token) for token in tokens):
        return False
    utilities = [t for t in tokens if '-' in t or ':' in t or t in _STANDALONE_UTILITIES]
    return len(utilities) * 2 >= len(tokens)


def is_excluded_string(text: str) -> bool:
    """
    Check if string should never be reported as user-facing text.

    Excludes:
        - Pure emoji strings
        - URLs and route paths
        - Pure numbers
        - Code identifiers and constants
        - CSS class lists
        - Very short strings
    """
    if not text or len(text.strip()) <= 1:
        return True

    stripped = text.strip()

    if is_pure_emoji(stripped):
        return True

    for pattern in _EXCLUDE_PATTERNS:
        if pattern.match(stripped):
            return True

    if looks_like_css_classes(stripped):
        return True

    return False


def alpha_ratio(text: str) -> float:
    """Share of alphabetic characters in text (0.0 for empty)."""
    if not text:
        return 0.0
    return sum(c.isalpha() for c in text) / len(text)

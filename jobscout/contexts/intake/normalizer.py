"""
Job posting text normalizer for the Intake context.

Two jobs live here:
- Preprocess raw posting text before extraction (unicode cleanup, markdown
  header markers). Every replacement is one character for one character, so
  evidence offsets computed on normalized text are valid offsets into the
  raw text the user pasted.
- Normalize identity components (company, title, location, URL) for the
  canonical id used in deduplication.

Design principle: Normalize BEFORE parsing.
"""

import re
from urllib.parse import parse_qsl, urlencode, urlsplit

# Unicode replacements: problematic char → same-length ASCII equivalent
UNICODE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space
    "\u202f": " ",  # narrow no-break space
    "\u2009": " ",  # thin space
    # Zero-width characters → space (removal would shift offsets)
    "\u200b": " ",  # zero-width space
    "\u200c": " ",  # zero-width non-joiner
    "\u200d": " ",  # zero-width joiner
    "\u2060": " ",  # word joiner
    "\ufeff": " ",  # BOM
    # Quotes
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote
    "\u201c": '"',  # left double quote
    "\u201d": '"',  # right double quote
    # Misc
    "\u00b7": "*",  # middle dot (used as bullet)
    "\uff1a": ":",  # fullwidth colon
}

_UNICODE_TABLE = str.maketrans(UNICODE_REPLACEMENTS)

# **Requirements:** / __Requirements:__ / ## Requirements
MARKDOWN_EMPHASIS = re.compile(r"\*\*|__")
MARKDOWN_HEADING = re.compile(r"^([^\S\n]*)(#{1,6})(?=[^\S\n])", re.MULTILINE)

# Query parameters that never change which posting a URL points at
TRACKING_PARAMS = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        "ref",
        "src",
        "source",
        "fbclid",
        "gclid",
        "li_fat_id",
    }
)


def normalize_unicode(text: str) -> str:
    """
    Replace unicode characters that cause parsing issues.

    Args:
        text: Raw text possibly containing problematic unicode

    Returns:
        Text of identical length with normalized characters
    """
    return text.translate(_UNICODE_TABLE)


def blank_markdown_markers(text: str) -> str:
    """
    Blank out markdown emphasis and heading markers.

    "**Requirements:**" becomes "  Requirements:  " so header detection sees
    a plain labeled line.
    """
    text = MARKDOWN_EMPHASIS.sub(lambda m: " " * len(m.group(0)), text)
    return MARKDOWN_HEADING.sub(lambda m: m.group(1) + " " * len(m.group(2)), text)


def preprocess_posting_text(text: str) -> str:
    """
    Preprocess posting text before extraction.

    This is the main entry point for text normalization. The result has the
    same length as the input.

    Args:
        text: Raw job posting text

    Returns:
        Normalized text ready for section and field extraction
    """
    return blank_markdown_markers(normalize_unicode(text))


# =============================================================================
# IDENTITY NORMALIZATION
# =============================================================================


def normalize_for_hash(value: str) -> str:
    """
    Reduce an identity component to casefolded letters and digits of any script.

    Example:
        >>> normalize_for_hash("  Senior Engineer (Remote) ")
        "seniorengineerremote"
        >>> normalize_for_hash("ソニー株式会社")
        "ソニー株式会社"
    """
    return re.sub(r"[\W_]", "", value.casefold())


def canonicalize_url(url: str) -> str:
    """
    Normalize a job URL for identity comparison.

    Lowercases scheme and host, drops a leading "www.", strips tracking
    query parameters and fragments, and removes a trailing slash from the path.

    Example:
        >>> canonicalize_url("https://www.Example.com/jobs/42/?utm_source=x&id=7")
        "https://example.com/jobs/42?id=7"
    """
    parts = urlsplit(url.strip())
    if not parts.netloc:
        # "example.com/jobs/42" parses as a bare path
        parts = urlsplit(f"https://{url.strip()}")
    scheme = (parts.scheme or "https").lower()
    host = parts.netloc.lower()
    if host.startswith("www."):
        host = host[4:]

    path = parts.path.rstrip("/")
    kept = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key.lower() not in TRACKING_PARAMS
    ]
    query = urlencode(sorted(kept))

    normalized = f"{scheme}://{host}{path}"
    return f"{normalized}?{query}" if query else normalized


def clean_title(title: str) -> str:
    """Remove brackets and stray separators from an extracted title."""
    cleaned = re.sub(r"[\[\](){}]", " ", title)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned.strip("-–—: ").strip()


def clean_location(location: str) -> str:
    cleaned = re.sub(r"\s+", " ", location).strip()
    return cleaned.rstrip(",. ")

"""Display formatting helpers for Campus Gaming Network.

Small deterministic functions used by the mappers: case formatting, link
building and avatar hashing. None of them perform I/O.
"""

import hashlib
import re
import unicodedata
from typing import Optional
from urllib.parse import quote, urlencode

from pydantic import HttpUrl, TypeAdapter, ValidationError

from cgn import config

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar"
DEFAULT_GRAVATAR_SIZE = 150
GOOGLE_MAPS_QUERY_URL = "https://www.google.com/maps/search/?api=1&query="
STORAGE_URL_TEMPLATE = "https://storage.googleapis.com/v0/b/{bucket}/o/{path}?alt=media&token={token}"

_APOSTROPHES = re.compile(r"['’]")

# Letters NFKD leaves whole
_DEBURRED_LETTERS = str.maketrans(
    {"ß": "ss", "æ": "ae", "Æ": "Ae", "ø": "o", "Ø": "O", "œ": "oe", "Œ": "Oe",
     "ł": "l", "Ł": "L", "đ": "d", "Đ": "D", "þ": "th", "Þ": "Th"}
)

# Anything that is a letter but not an ASCII capital counts as lower case
_LOWER = r"[^\W\d_A-Z]"
_WORDS = re.compile(
    r"\d*(?:1st|2nd|3rd|(?![123])\dth)(?=\b|[A-Z_])"
    r"|\d*(?:1ST|2ND|3RD|(?![123])\dTH)(?=\b|[a-z_])"
    rf"|[A-Z]+(?=[A-Z]{_LOWER})"
    rf"|[A-Z]?{_LOWER}+"
    r"|[A-Z]+"
    r"|\d+"
)

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "!~*'()"

_http_url = TypeAdapter(HttpUrl)


def deburr(value: str) -> str:
    """Strip accents and other combining marks ("école" becomes "ecole")."""
    decomposed = unicodedata.normalize("NFKD", value.translate(_DEBURRED_LETTERS))
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def start_case(value: Optional[str]) -> str:
    """Split text into words and upper-case the first letter of each.

    Accents and apostrophes are removed, punctuation separates words, and
    words also break between digits and letters and at camelCase humps.
    Ordinals stay whole: "3rd ave suite 2b" becomes "3rd Ave Suite 2 B".
    """
    if not value:
        return ""
    words = _WORDS.findall(_APOSTROPHES.sub("", deburr(str(value))))
    return " ".join(word[:1].upper() + word[1:] for word in words)


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def is_valid_url(value: Optional[str]) -> bool:
    """Check that a value is an absolute http(s) URL."""
    if not value or not isinstance(value, str):
        return False
    try:
        _http_url.validate_python(value.strip())
    except ValidationError:
        return False
    return True


def google_maps_link(query: str) -> str:
    """Build a Google Maps search link for a free-text address."""
    return f"{GOOGLE_MAPS_QUERY_URL}{encode_uri_component(query or '')}"


def create_gravatar_hash(email: Optional[str]) -> str:
    """Hash an email the way Gravatar expects (md5 of trimmed, lower-cased email).

    Returns an empty string for a missing email.
    """
    if not email or not isinstance(email, str):
        return ""
    normalized = email.strip().lower()
    if not normalized:
        return ""
    return hashlib.md5(normalized.encode("utf-8")).hexdigest()


def gravatar_url(
    gravatar_hash: str,
    size: int = DEFAULT_GRAVATAR_SIZE,
    default: Optional[str] = None,
    rating: Optional[str] = None,
) -> str:
    params = {
        "s": size,
        "d": default or config.get_gravatar_default(),
        "r": rating or config.get_gravatar_rating(),
    }
    return f"{GRAVATAR_BASE_URL}/{gravatar_hash}?{urlencode(params)}"


def get_school_logo_path(school_id: str, extension: str = "png") -> str:
    return f"schools/{school_id}/images/logo.{extension}"


def get_school_logo_url(school_id: str, extension: str = "png") -> str:
    """Public storage URL for a school's logo.

    Returns an empty string when no storage bucket is configured.
    """
    bucket = config.get_storage_bucket()
    if not bucket or not school_id:
        return ""
    return STORAGE_URL_TEMPLATE.format(
        bucket=bucket,
        path=encode_uri_component(get_school_logo_path(school_id, extension)),
        token=school_id,
    )

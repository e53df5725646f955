import re
import unicodedata

_NON_WORD = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_-]+")


def generate_slug(text: str) -> str:
    """
    "Warung Bu Sri's Kitchen" -> "warung-bu-sris-kitchen"
    "Kafé Desa" -> "kafe-desa"

    Accents are folded to ASCII; letters with no ASCII form are dropped, so
    the result can be empty.
    """
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = _NON_WORD.sub("", text.lower().strip())
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")

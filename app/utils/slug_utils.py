"""
Slug helpers for topics and articles.

Topic slugs are the plain slugified title. Article slugs carry a
millisecond timestamp suffix (``my-first-ctf-writeup-1718000000000``) so
repeated titles stay unique.
"""

import re
import time
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """
    Lowercase, collapse every run of non ``[a-z0-9]`` characters into a
    single ``-`` and strip leading/trailing dashes.

    >>> slugify("  Web Exploitation 101! ")
    'web-exploitation-101'
    """
    return _NON_ALNUM.sub("-", text.lower()).strip("-")


def now_millis() -> int:
    return int(time.time() * 1000)


def article_slug(title: str, millis: Optional[int] = None) -> str:
    """Build ``<slugified title>-<epoch ms>``."""
    if millis is None:
        millis = now_millis()
    return f"{slugify(title) or 'article'}-{millis}"

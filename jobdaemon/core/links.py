"""
Link canonicalization for listing identifiers.

The same posting is often reachable through different campaign tags
(e.g. ``?utm_source=intern-list.com`` vs ``?utm_source=Simplify&ref=Simplify``),
so tracking parameters are stripped before a link is used as an identifier.
"""

import urllib.parse
from typing import Optional

TRACKING_PARAM_PREFIXES = ("utm_",)

TRACKING_PARAMS = {
    "ref",
    "gclid",
    "fbclid",
    "msclkid",
    "mc_cid",
    "mc_eid",
    "_hsenc",
    "_hsmi",
    "gh_src",
    "lever-source",
}


def is_tracking_param(name: str) -> bool:
    name = name.lower()
    return name in TRACKING_PARAMS or name.startswith(TRACKING_PARAM_PREFIXES)


def is_absolute_url(value: Optional[str]) -> bool:
    """True for well-formed absolute http(s) URLs with a host."""
    if not value:
        return False
    parsed = urllib.parse.urlsplit(value.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def normalize_link(link: str) -> str:
    """
    Strip known tracking query parameters from an absolute URL.
    Remaining query pairs are kept verbatim. The fragment is kept: hash-routed
    boards carry the posting path in it.
    Anything that is not an absolute http(s) URL is returned trimmed but untouched.
    """
    link = link.strip()
    if not is_absolute_url(link):
        return link

    parsed = urllib.parse.urlsplit(link)
    kept = [
        pair
        for pair in parsed.query.split("&")
        if pair and not is_tracking_param(urllib.parse.unquote_plus(pair.split("=", 1)[0]))
    ]
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, "&".join(kept), parsed.fragment)
    )


def derive_listing_id(link: str, company: str, title: str) -> str:
    """Canonical link, or company+title when a source exposes no link."""
    if link:
        return link
    return f"{company}{title}"

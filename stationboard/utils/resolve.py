"""Turn whatever the user pasted into a start.gg tournament slug.

Accepts full tournament URLs, ``tournament/<slug>`` paths, bare slugs and
start.gg short links (``start.gg/abbey``). Short links are resolved by
following start.gg's redirect to the full tournament URL.
"""

import time

import requests

from .logging import log

USER_AGENT = "Mozilla/5.0 (compatible; StationBoard/1.0)"

_SHORT_URL_PREFIXES = (
    "https://www.start.gg/",
    "https://start.gg/",
    "http://www.start.gg/",
    "http://start.gg/",
    "www.start.gg/",
    "start.gg/",
)

# Resolved short links, for this process only
_resolved: dict[str, str] = {}


def extract_slug_from_url(url: str) -> str | None:
    """Extract the tournament slug from a start.gg URL or path.

    Handles URLs like:
    - https://www.start.gg/tournament/melee-abbey-tavern-123/details
    - https://start.gg/tournament/melee-abbey-tavern-123/event/singles
    """
    if "tournament/" not in url:
        return None

    slug_part = url.split("tournament/", 1)[1].split("/")[0]
    slug_part = slug_part.split("?")[0].split("#")[0]
    return slug_part or None


def strip_host(value: str) -> str:
    """Remove a leading start.gg host so only the path remains"""
    for prefix in _SHORT_URL_PREFIXES:
        if value.startswith(prefix):
            return value[len(prefix):]
    return value


def _follow_redirect(short_name: str) -> str | None:
    try:
        response = requests.head(
            f"https://start.gg/{short_name}",
            allow_redirects=True,
            timeout=15,
            headers={"User-Agent": USER_AGENT},
        )
        if response.status_code == 405:
            # Some edges refuse HEAD
            response = requests.get(
                f"https://start.gg/{short_name}",
                allow_redirects=True,
                timeout=15,
                headers={"User-Agent": USER_AGENT},
            )
    except requests.RequestException as e:
        log(f"⚠️  Short link lookup failed for {short_name}: {e}")
        return None

    if response.status_code != 200:
        log(f"⚠️  Short link {short_name} answered HTTP {response.status_code}")
        return None
    return extract_slug_from_url(response.url)


def resolve_short_url(short_name: str, max_retries: int = 3) -> str:
    """Resolve a start.gg short link (e.g. "abbey") to a tournament slug.

    Raises:
        RuntimeError: if start.gg never redirects to a tournament page
    """
    if short_name in _resolved:
        return _resolved[short_name]

    for attempt in range(max_retries):
        slug = _follow_redirect(short_name)
        if slug:
            _resolved[short_name] = slug
            return slug
        # Backoff between retries (0.5s, 1s, ...)
        if attempt < max_retries - 1:
            time.sleep(0.5 * (2**attempt))

    raise RuntimeError(f"Failed to resolve start.gg short link '{short_name}'")


def normalize_tournament_slug(value: str) -> str:
    """Best-effort tournament slug from a URL, path, short link or bare slug"""
    value = value.strip().rstrip("/")
    path = strip_host(value)

    slug = extract_slug_from_url(path)
    if slug:
        return slug

    # A host-prefixed single segment is a short link; a bare word is taken as a slug
    if path != value and "/" not in path:
        log(f"🔗 Resolving short link: {path}")
        return resolve_short_url(path)
    return path


def clear_cache() -> None:
    _resolved.clear()

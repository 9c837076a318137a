# app/core/normalization.py
import html

import bleach
from slugify import slugify


def trim(value):
    if isinstance(value, str):
        return value.strip()
    return value


def strip_xss(value):
    """
    Removes every tag (and script/style bodies are left as inert text).
    Returns plain text: entities produced by bleach are decoded again so
    that escape_html does not escape them twice.
    """
    if not isinstance(value, str):
        return value
    cleaned = bleach.clean(value, tags=set(), attributes={}, strip=True)
    return html.unescape(cleaned)


def escape_html(value):
    if not isinstance(value, str):
        return value
    return html.escape(value, quote=True)


def slug_from_name(name: str) -> str:
    """
    Canonical slug for a team name. Used both for the uniqueness check and
    for the stored value, so both must go through here. HTML entities in an
    escaped name are decoded by slugify before the slug is built.
    """
    if not name:
        return ""
    return slugify(name, lowercase=True)

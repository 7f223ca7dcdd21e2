from typing import Callable

from slugify import slugify as make_slug


def slugify(value: str, max_length: int = 100) -> str:
    """
    Lowercase ASCII slug: "Hello, World!" -> "hello-world"
    """
    return make_slug(value, max_length=max_length)


def unique_slug(base: str, exists: Callable[[str], bool], fallback: str = "item") -> str:
    """Return ``base`` or ``base-2``, ``base-3``... whichever ``exists`` rejects last"""
    base = base or fallback
    candidate = base
    suffix = 2
    while exists(candidate):
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def clean_tags(tags) -> list:
    """Strip whitespace and drop empty or repeated tags, keeping order"""
    cleaned = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


def escape_like(value: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so user input matches literally"""
    return (
        value.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )

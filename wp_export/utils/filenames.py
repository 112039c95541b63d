from __future__ import annotations

import re
from typing import Dict, Optional, Tuple

DEFAULT_FALLBACK = "post"
DEFAULT_MAX_LENGTH = 200

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def safe_filename(
    value: Optional[str],
    *,
    max_length: int = DEFAULT_MAX_LENGTH,
    fallback: str = DEFAULT_FALLBACK,
) -> str:
    """
    Turn a slug or title into a filesystem-safe file stem.

    Lowercases, collapses every run of characters outside ``[a-z0-9]`` into a
    single ``-``, trims ``-`` from both ends and caps the length.  Returns
    ``fallback`` when nothing is left.
    """
    text = _NON_ALNUM.sub("-", (value or "").lower()).strip("-")
    return text[:max_length] or fallback


def post_filename(
    slug: Optional[str],
    title: Optional[str],
    *,
    extension: str = "html",
    max_length: int = DEFAULT_MAX_LENGTH,
    fallback: str = DEFAULT_FALLBACK,
) -> str:
    """File name for a post: the sanitized slug, or the sanitized title."""
    stem = slug or safe_filename(title, max_length=max_length, fallback=fallback)
    stem = safe_filename(stem, max_length=max_length, fallback=fallback)
    return f"{stem}.{extension}" if extension else stem


class FilenameRegistry:
    """
    Tracks file names written during one run.

    ``claim`` returns the name to write and whether it collided with a name
    already written.  With ``suffix=False`` a colliding name is returned as
    is (the later post overwrites the earlier file); with ``suffix=True`` a
    free ``name-2.ext``, ``name-3.ext``... is returned instead, with the
    stem shortened so that it stays within ``max_length`` characters.
    """

    def __init__(self, *, suffix: bool = False, max_length: int = DEFAULT_MAX_LENGTH) -> None:
        self.suffix = suffix
        self.max_length = max_length
        self._owners: Dict[str, str] = {}

    def __contains__(self, filename: str) -> bool:
        return filename in self._owners

    def owner(self, filename: str) -> Optional[str]:
        return self._owners.get(filename)

    def _suffixed(self, filename: str) -> str:
        stem, dot, ext = filename.rpartition(".")
        if not dot:
            stem, ext = filename, ""
        n = 2
        while True:
            tail = f"-{n}"
            base = stem[: max(self.max_length - len(tail), 1)].rstrip("-") or stem[:1]
            candidate = f"{base}{tail}.{ext}" if ext else f"{base}{tail}"
            if candidate not in self._owners:
                return candidate
            n += 1

    def claim(self, filename: str, owner: str = "") -> Tuple[str, bool]:
        collided = filename in self._owners
        if collided and self.suffix:
            filename = self._suffixed(filename)
        self._owners[filename] = owner
        return filename, collided

    def release(self, filename: str, previous_owner: Optional[str] = None) -> None:
        """Undo a claim whose file could not be written.

        ``previous_owner`` is restored as the owner when given.
        """
        if previous_owner is None:
            self._owners.pop(filename, None)
        else:
            self._owners[filename] = previous_owner

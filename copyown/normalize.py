"""
Normalize the casing of relative import paths.

Copied files are renamed to kebab-case, so a relative import of a PascalCase
file has to follow (``'./FileImage'`` becomes ``'./file-image'``).  A
component importing the same-named file of a sibling component folder
(``'../Upload/Upload'``) points at a folder that no longer exists after
flattening and is collapsed to the sibling file (``'./upload'``).

A file can opt out completely with a directive comment placed before its
first import::

    // @microbuild-preserve-casing
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .casing import to_kebab_case
from .config import DEFAULT_NAMESPACE
from .specifiers import ImportSpecifier, first_import_offset, rewrite_specifiers

__all__ = ["has_preserve_casing_directive", "normalize_import_paths", "normalize_specifier"]

logger = logging.getLogger(__name__)

_PASCAL_SEGMENT = re.compile(r"^[A-Z][A-Za-z0-9]*$")


def _directive(namespace: str) -> "re.Pattern[str]":
    return re.compile(
        rf"^[ \t]*//[ \t]*@{re.escape(namespace)}-preserve-casing[ \t]*\r?$",
        re.MULTILINE,
    )


def has_preserve_casing_directive(content: str, namespace: str = DEFAULT_NAMESPACE) -> bool:
    """Return ``True`` if the opt-out directive appears before the first import."""
    match = _directive(namespace).search(content)
    if match is None:
        return False
    first_import = first_import_offset(content)
    return first_import is None or match.start() < first_import


def _is_pascal(segment: str) -> bool:
    # all-caps names such as 'CSS' are not PascalCase
    return bool(_PASCAL_SEGMENT.match(segment)) and segment.upper() != segment


def normalize_specifier(specifier: str) -> Optional[str]:
    """Return the kebab-case form of a relative specifier, or ``None``.

    ``None`` means the specifier is already normalized.
    """
    body = specifier.split("/")
    index = body[-1] == "index" and len(body) > 1
    if index:
        body = body[:-1]
    last = body[-1]
    if not _is_pascal(last):
        return None

    name = to_kebab_case(last)
    previous = body[-2] if len(body) >= 2 else None
    if previous not in (None, ".", "..") and to_kebab_case(previous) == name:
        head: List[str] = body[:-2]
        # The importing file sat in a folder of its own that has been
        # flattened, so the sibling is one level closer.
        if head and head[0] == "..":
            head = head[1:]
        parts = head + [name]
    else:
        parts = body[:-1] + [name]

    if index:
        parts.append("index")
    if parts[0] not in (".", ".."):
        parts.insert(0, ".")
    return "/".join(parts)


def normalize_import_paths(content: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Rewrite PascalCase relative import paths to kebab-case.

    Package imports are never touched.  If ``content`` carries the
    ``// @<namespace>-preserve-casing`` directive before its first import the
    content is returned unmodified.
    """
    if has_preserve_casing_directive(content, namespace):
        logger.debug("Preserve-casing directive found, skipping normalization")
        return content

    def mapper(spec: ImportSpecifier) -> Optional[str]:
        return normalize_specifier(spec.specifier)

    return rewrite_specifiers(content, lambda spec: spec.is_relative, mapper)

"""
Identifier casing helpers.

Component source files in the shared packages are named in PascalCase
(``FileImage.tsx``) while copied files follow the kebab-case convention of
the consumer project (``file-image.tsx``).  The two functions here convert
between those conventions and are used by every other part of the engine.
"""

from __future__ import annotations

import re

__all__ = ["to_kebab_case", "to_pascal_case"]

_LOWER_UPPER = re.compile(r"([a-z])([A-Z])")
# An acronym only ends a word when at least two capitals precede the
# capitalised word; a single leading capital belongs to the word (VForm).
_ACRONYM_WORD = re.compile(r"([A-Z]{2,})([A-Z][a-z])")
_SEPARATORS = re.compile(r"[\s_]+")


def to_kebab_case(identifier: str) -> str:
    """Convert a PascalCase or camelCase identifier to kebab-case.

    ``InputBlockEditor`` becomes ``input-block-editor``, ``HTMLInput`` becomes
    ``html-input`` and ``VForm`` becomes ``vform``.  Underscores and
    whitespace are turned into hyphens.  Input that is already kebab-case is
    returned unchanged.
    """
    result = _LOWER_UPPER.sub(r"\1-\2", identifier)
    result = _ACRONYM_WORD.sub(r"\1-\2", result)
    result = _SEPARATORS.sub("-", result)
    return result.lower()


def to_pascal_case(identifier: str) -> str:
    """Convert a kebab-case (or snake_case) identifier to PascalCase.

    Each hyphen separated word gets its first letter upper-cased and the
    words are joined without a separator: ``input-block-editor`` becomes
    ``InputBlockEditor``.
    """
    words = re.split(r"[-_]+", identifier)
    return "".join(word[:1].upper() + word[1:] for word in words if word)

"""
Locate and rewrite module specifiers in JavaScript/TypeScript source.

All import rewriting in :mod:`copyown` goes through :func:`rewrite_specifiers`.
Matching is done with a regular expression over the statement forms used
throughout the component packages rather than with a parser:

* ``import <bindings> from '<specifier>'``
* ``import type <bindings> from '<specifier>'``
* ``export <bindings> from '<specifier>'`` (including ``export type``)
* ``import '<specifier>'`` (side-effect imports)

Bindings may span several lines and either quote style is accepted.  Only the
specifier text between the quotes is ever replaced, so bindings, the ``type``
keyword, quotes and surrounding whitespace are preserved exactly.  Text that
merely looks like an import inside a string or comment is matched as well;
callers accept that in exchange for not depending on a full parser.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

__all__ = [
    "ImportKind",
    "ImportSpecifier",
    "first_import_offset",
    "is_relative",
    "iter_specifiers",
    "rewrite_specifiers",
]

_STATEMENT = re.compile(
    r"""
    (?:
        \b(?P<side_effect>import)\s*(?=['"])
      | \b(?P<keyword>import|export)\b(?P<type_only>\s+type\b)?
        # bindings end at a semicolon or at a line opening the next statement
        (?:(?!\n\s*(?:import|export)\b)[^;'"`])*?\bfrom\s*
    )
    (?P<quote>['"])(?P<specifier>[^'"\r\n]+)(?P=quote)
    """,
    re.VERBOSE,
)


class ImportKind(enum.Enum):
    PACKAGE = "package"
    RELATIVE = "relative"


def is_relative(specifier: str) -> bool:
    """Return ``True`` for ``./``, ``../``, ``.`` and ``..`` specifiers."""
    return specifier in {".", ".."} or specifier.startswith(("./", "../"))


@dataclass(frozen=True)
class ImportSpecifier:
    """A single specifier occurrence.

    ``start`` and ``end`` delimit the specifier text (without quotes) in the
    scanned content; ``statement_start`` is the offset of the ``import`` or
    ``export`` keyword.
    """

    specifier: str
    kind: ImportKind
    type_only: bool
    keyword: str
    quote: str
    start: int
    end: int
    statement_start: int

    @property
    def is_package(self) -> bool:
        return self.kind is ImportKind.PACKAGE

    @property
    def is_relative(self) -> bool:
        return self.kind is ImportKind.RELATIVE


def iter_specifiers(content: str) -> Iterator[ImportSpecifier]:
    """Yield every import/export specifier in ``content`` in source order."""
    for match in _STATEMENT.finditer(content):
        specifier = match.group("specifier")
        keyword = match.group("side_effect") or match.group("keyword")
        yield ImportSpecifier(
            specifier=specifier,
            kind=ImportKind.RELATIVE if is_relative(specifier) else ImportKind.PACKAGE,
            type_only=match.group("type_only") is not None,
            keyword=keyword,
            quote=match.group("quote"),
            start=match.start("specifier"),
            end=match.end("specifier"),
            statement_start=match.start(),
        )


def rewrite_specifiers(
    content: str,
    predicate: Callable[[ImportSpecifier], bool],
    mapper: Callable[[ImportSpecifier], Optional[str]],
) -> str:
    """Replace the specifiers selected by ``predicate`` with ``mapper``'s result.

    Parameters
    ----------
    content: str
        Source text to rewrite.
    predicate: callable
        Decides whether a specifier is a candidate for rewriting.
    mapper: callable
        Returns the replacement specifier.  Returning ``None`` (or the
        unchanged specifier) leaves that occurrence as it is.

    Returns
    -------
    str
        The rewritten content.  When nothing is replaced the original string
        is returned.
    """
    pieces: List[str] = []
    position = 0
    for spec in iter_specifiers(content):
        if not predicate(spec):
            continue
        replacement = mapper(spec)
        if replacement is None or replacement == spec.specifier:
            continue
        pieces.append(content[position:spec.start])
        pieces.append(replacement)
        position = spec.end
    if not pieces:
        return content
    pieces.append(content[position:])
    return "".join(pieces)


def first_import_offset(content: str) -> Optional[int]:
    """Return the offset of the first ``import`` statement, or ``None``."""
    for spec in iter_specifiers(content):
        if spec.keyword == "import":
            return spec.statement_start
    return None

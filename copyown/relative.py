"""
Re-point relative imports after a file changes location.

A component file inside a shared package usually lives in its own folder
(``ui-interfaces/src/file-image/FileImage.tsx``) while its copy in the
consumer project is a single flat file (``components/ui/file-image.tsx``).
Relative specifiers written for the old location (``'../upload'``) have to
be recomputed so they still reach the same sibling module at the new one
(``'./upload'``).

Paths are handled as lists of segments and the new specifier is derived the
same way :func:`os.path.relpath` would derive it:

1. The source and destination directories are aligned on their longest
   common run of trailing directories.  Whatever precedes that run is the
   *root* of each tree; everything inside the source root has a counterpart
   inside the destination root.
2. If the source folder was collapsed into the destination file (the folder
   name matches the destination file name), that folder is removed from the
   source side before aligning and sibling component folders are assumed to
   be collapsed the same way.
3. Each relative specifier is resolved against the source directory,
   translated into the destination tree and made relative to the destination
   directory again.

Nothing on disk is consulted, and relative specifiers are never turned into
alias imports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .casing import to_kebab_case
from .config import alias_segments
from .specifiers import ImportSpecifier, rewrite_specifiers

__all__ = [
    "relative_specifier",
    "resolve_segments",
    "split_path",
    "transform_relative_imports",
    "transform_vform_imports",
]

logger = logging.getLogger(__name__)


def split_path(path: str) -> List[str]:
    """Split a slash (or backslash) separated path into its segments.

    Empty and ``.`` segments are dropped; ``..`` segments are kept.
    """
    return [part for part in path.replace("\\", "/").split("/") if part not in ("", ".")]


def resolve_segments(segments: Sequence[str]) -> Optional[List[str]]:
    """Collapse ``..`` segments, returning ``None`` if the path escapes its root."""
    resolved: List[str] = []
    for part in segments:
        if part == "..":
            if not resolved:
                return None
            resolved.pop()
        else:
            resolved.append(part)
    return resolved


def relative_specifier(from_dir: Sequence[str], target: Sequence[str]) -> str:
    """Return the import specifier reaching ``target`` from ``from_dir``.

    The result always starts with ``./`` or ``../`` so that it remains a
    relative specifier, e.g. ``relative_specifier(['a', 'b'], ['a', 'c'])``
    is ``'../c'``.
    """
    common = 0
    for left, right in zip(from_dir, target):
        if left != right:
            break
        common += 1
    ups = len(from_dir) - common
    rest = list(target[common:])
    if ups == 0:
        return "./" + "/".join(rest) if rest else "."
    return "/".join([".."] * ups + rest)


def _same_name(left: str, right: str) -> bool:
    return to_kebab_case(left) == to_kebab_case(right)


def _stem(filename: str) -> str:
    return filename.split(".", 1)[0]


def _find_run(haystack: Sequence[str], needle: Sequence[str]) -> Optional[int]:
    if not needle:
        return None
    for index in range(len(haystack) - len(needle) + 1):
        if list(haystack[index:index + len(needle)]) == list(needle):
            return index
    return None


@dataclass(frozen=True)
class _Move:
    """How a file's surroundings map from the source tree to the destination."""

    source_dir: Tuple[str, ...]
    dest_dir: Tuple[str, ...]
    source_root: Tuple[str, ...]
    dest_root: Tuple[str, ...]
    flattened: bool
    boundary: Tuple[str, ...] = ()

    @classmethod
    def between(cls, source_file: str, dest_file: str, allow_flatten: bool) -> "_Move":
        source = split_path(source_file)
        dest = split_path(dest_file)
        source_dir, dest_dir = source[:-1], dest[:-1]
        dest_stem = _stem(dest[-1]) if dest else ""

        inner = source_dir
        flattened = False
        if (
            allow_flatten
            and source_dir
            and _same_name(source_dir[-1], dest_stem)
            and not (dest_dir and _same_name(dest_dir[-1], source_dir[-1]))
        ):
            inner = source_dir[:-1]
            flattened = True

        shared = 0
        while (
            shared < min(len(inner), len(dest_dir))
            and _same_name(inner[len(inner) - 1 - shared], dest_dir[len(dest_dir) - 1 - shared])
        ):
            shared += 1

        return cls(
            source_dir=tuple(source_dir),
            dest_dir=tuple(dest_dir),
            source_root=tuple(inner[:len(inner) - shared]),
            dest_root=tuple(dest_dir[:len(dest_dir) - shared]),
            flattened=flattened,
        )

    def within(self, alias: str) -> "_Move":
        """Restrict rewritten targets to the alias tree the destination is in."""
        segments = alias_segments(alias)
        index = _find_run(self.dest_dir, segments)
        if index is None:
            return self
        boundary = self.dest_dir[:index + len(segments)]
        return _Move(
            self.source_dir, self.dest_dir, self.source_root, self.dest_root,
            self.flattened, boundary,
        )

    def remap(self, specifier: str) -> Optional[str]:
        target = resolve_segments(list(self.source_dir) + split_path(specifier))
        if target is None or tuple(target[:len(self.source_root)]) != self.source_root:
            return None
        if self.flattened and tuple(target[:len(self.source_dir)]) == self.source_dir:
            # Same-folder imports of a collapsed component are kept as written.
            return None
        inside = target[len(self.source_root):]
        if self.flattened and len(inside) >= 2:
            # A sibling component folder collapses into a single file too:
            # '../upload/Upload' and '../upload/index' both become 'upload'.
            if inside[-1] == "index" or _same_name(inside[-1], inside[-2]):
                inside = inside[:-1]
        new_target = list(self.dest_root) + inside
        if self.boundary and tuple(new_target[:len(self.boundary)]) != self.boundary:
            return None
        rewritten = relative_specifier(self.dest_dir, new_target)
        if rewritten == relative_specifier(self.source_dir, target):
            return None
        return rewritten


def _rewrite(content: str, move: _Move) -> str:
    def mapper(spec: ImportSpecifier) -> Optional[str]:
        rewritten = move.remap(spec.specifier)
        if rewritten is not None:
            logger.debug("Re-pointing %r to %r", spec.specifier, rewritten)
        return rewritten

    return rewrite_specifiers(content, lambda spec: spec.is_relative, mapper)


def transform_relative_imports(
    content: str,
    source_file: str,
    dest_file: str,
    components_alias: str,
) -> str:
    """Rewrite relative imports of a component file moved into the project.

    Parameters
    ----------
    content: str
        Source text of the file.
    source_file: str
        Path of the file inside the source packages, e.g.
        ``ui-interfaces/src/file-image/FileImage.tsx``.
    dest_file: str
        Path of the copy inside the consumer project, e.g.
        ``components/ui/file-image.tsx``.
    components_alias: str
        Alias of the destination components directory (``@/components/ui``).
        When the destination lies below that directory, rewritten imports are
        kept inside it; specifiers that would leave it are not touched.

    Returns
    -------
    str
        The content with re-pointed relative specifiers.  Specifiers whose
        relative position did not change are returned verbatim.
    """
    move = _Move.between(source_file, dest_file, allow_flatten=True).within(components_alias)
    return _rewrite(content, move)


def transform_vform_imports(content: str, source_file: str, dest_file: str) -> str:
    """Rewrite relative imports of a file from the shared form package.

    The form package is copied with its folder structure intact
    (``ui-form/src/components/FormField.tsx`` becomes
    ``components/ui/vform/components/FormField.tsx``), so the trees are only
    aligned, never flattened.  Shared ``./types`` and ``../types`` imports
    therefore keep pointing at the same ``types`` module.
    """
    move = _Move.between(source_file, dest_file, allow_flatten=False)
    return _rewrite(content, move)

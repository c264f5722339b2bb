"""
Provenance headers for copied files.

Every file copied into a consumer project is stamped with a comment block
recording where it came from::

    /**
     * @microbuild-origin @microbuild/ui-interfaces/input
     * @microbuild-version 1.0.0
     * @microbuild-date 2024-01-15
     */

The block is placed at the very top of the file, or right after a leading
``"use client";`` directive, which has to stay the first statement.  Later
commands read it back with :func:`extract_origin_info` to report and update
installed files.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .config import DEFAULT_NAMESPACE

__all__ = [
    "OriginInfo",
    "add_origin_header",
    "ensure_use_client",
    "extract_origin_info",
    "generate_origin_header",
    "has_origin_header",
    "remove_use_client",
    "strip_origin_header",
]

_USE_CLIENT = re.compile(r"""^(["'])use client\1;?[ \t]*(?:\r?\n|$)""")


@dataclass(frozen=True)
class OriginInfo:
    """Fields read from a provenance header; missing tags are ``None``."""

    origin: Optional[str] = None
    version: Optional[str] = None
    date: Optional[str] = None

    @property
    def package(self) -> Optional[str]:
        """The package part of ``origin`` (``@microbuild/ui-interfaces``)."""
        if self.origin is None:
            return None
        parts = self.origin.split("/")
        size = 2 if self.origin.startswith("@") else 1
        return "/".join(parts[:size])

    @property
    def subpath(self) -> Optional[str]:
        """The part of ``origin`` after the package (``input``)."""
        if self.origin is None:
            return None
        parts = self.origin.split("/")
        size = 2 if self.origin.startswith("@") else 1
        return "/".join(parts[size:]) or None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"origin": self.origin, "version": self.version, "date": self.date}


def generate_origin_header(
    subpath: str,
    package_name: str,
    version: str = "1.0.0",
    date: Optional[str] = None,
    namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Return the header block, followed by a blank line.

    ``date`` defaults to today's date in ISO format.
    """
    if date is None:
        date = datetime.date.today().isoformat()
    return (
        "/**\n"
        f" * @{namespace}-origin {package_name}/{subpath}\n"
        f" * @{namespace}-version {version}\n"
        f" * @{namespace}-date {date}\n"
        " */\n"
        "\n"
    )


def _line_ending(content: str) -> str:
    """Return the line ending used by the first line of ``content``."""
    index = content.find("\n")
    return "\r\n" if index > 0 and content[index - 1] == "\r" else "\n"


def _split_use_client(content: str) -> Tuple[str, str]:
    """Split ``content`` into a leading use client directive and the rest."""
    match = _USE_CLIENT.match(content)
    if match is None:
        return "", content
    directive = match.group(0)
    if not directive.endswith("\n"):
        directive += _line_ending(content)
    return directive, content[match.end():]


def add_origin_header(
    content: str,
    subpath: str,
    package_name: str,
    version: str = "1.0.0",
    *,
    date: Optional[str] = None,
    namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Insert a provenance header at the top of ``content``.

    Parameters
    ----------
    content: str
        File content to stamp.
    subpath: str
        Component or module name inside the package, e.g. ``input``.
    package_name: str
        Package the file was copied from, e.g. ``@microbuild/ui-interfaces``.
    version: str
        Registry version of the package.
    date: str, optional
        Date to record; today's date by default.
    namespace: str
        Tag prefix used in the header.

    Returns
    -------
    str
        ``content`` with the header inserted.  A leading ``"use client";``
        directive stays on the first line with the header directly after it;
        blank lines between the directive and the body are absorbed.  The
        header uses the line ending of the first line of ``content``.
    """
    newline = _line_ending(content)
    header = generate_origin_header(subpath, package_name, version, date, namespace)
    if newline != "\n":
        header = header.replace("\n", newline)
    directive, rest = _split_use_client(content)
    if directive:
        return directive + newline + header + rest.lstrip("\r\n")
    return header + content


def _tag(namespace: str, name: str) -> "re.Pattern[str]":
    return re.compile(rf"@{re.escape(namespace)}-{name}[ \t]+([^\r\n*]+)")


def extract_origin_info(content: str, namespace: str = DEFAULT_NAMESPACE) -> Optional[OriginInfo]:
    """Read the provenance header of ``content``.

    Returns ``None`` when none of the origin, version and date tags is
    present.  A partial header gives an :class:`OriginInfo` with the missing
    fields set to ``None``.
    """
    found: Dict[str, Optional[str]] = {}
    for name in ("origin", "version", "date"):
        match = _tag(namespace, name).search(content)
        found[name] = match.group(1).strip() if match else None
    if not any(found.values()):
        return None
    return OriginInfo(**found)


def has_origin_header(content: str, namespace: str = DEFAULT_NAMESPACE) -> bool:
    return f"@{namespace}-origin" in content


def strip_origin_header(content: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Remove a provenance header placed by :func:`add_origin_header`.

    Only a block at the top of the file (or after a use client directive)
    that carries the origin tag is removed; other leading comments are kept.
    """
    directive, rest = _split_use_client(content)
    body = rest.lstrip("\r\n") if directive else rest
    match = re.match(r"/\*\*.*?\*/[ \t]*(?:\r?\n)*", body, re.DOTALL)
    if match is None or f"@{namespace}-origin" not in match.group(0):
        return content
    remainder = body[match.end():]
    if directive:
        return directive + _line_ending(content) + remainder
    return remainder


def ensure_use_client(content: str) -> str:
    """Prefix ``content`` with a ``"use client";`` directive unless it has one."""
    stripped = content.lstrip()
    if stripped.startswith(('"use client"', "'use client'")):
        return content
    return '"use client";\n\n' + content


def remove_use_client(content: str) -> str:
    """Drop a leading use client directive and the blank lines after it."""
    directive, rest = _split_use_client(content.lstrip())
    if not directive:
        return content
    return rest.lstrip("\r\n")

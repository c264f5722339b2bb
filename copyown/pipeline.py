"""
Run the full transformation of one copied file.

The individual transforms are applied in a fixed order:

1. package imports are rewritten to project aliases
   (:func:`copyown.imports.transform_imports`);
2. relative imports are re-pointed, but only when the file changes position
   (:mod:`copyown.relative`);
3. relative import paths are normalized to kebab-case
   (:func:`copyown.normalize.normalize_import_paths`);
4. the provenance header is stamped (:func:`copyown.origin.add_origin_header`).

Like every step it calls, :func:`transform_file` is a pure function of its
arguments.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Config
from .imports import transform_imports
from .normalize import normalize_import_paths
from .origin import add_origin_header
from .relative import transform_relative_imports, transform_vform_imports

__all__ = ["OriginStamp", "transform_file"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OriginStamp:
    """What to record in the provenance header of a transformed file."""

    subpath: str
    package_name: str
    version: str = "1.0.0"
    date: Optional[str] = None


def transform_file(
    content: str,
    config: Config,
    *,
    source_file: Optional[str] = None,
    dest_file: Optional[str] = None,
    vform: bool = False,
    origin: Optional[OriginStamp] = None,
) -> str:
    """Transform the content of a file copied into the consumer project.

    Parameters
    ----------
    content: str
        Original file content.
    config: Config
        Project configuration.
    source_file, dest_file: str, optional
        Location of the file in the source packages and in the project.
        Relative imports are only re-pointed when both are given.
    vform: bool
        Treat the file as part of the shared form package, whose folder
        structure is kept when copying.
    origin: OriginStamp, optional
        Stamp a provenance header when given.

    Returns
    -------
    str
        The transformed content.
    """
    result = transform_imports(content, config)
    if source_file is not None and dest_file is not None:
        if vform:
            result = transform_vform_imports(result, source_file, dest_file)
        else:
            result = transform_relative_imports(
                result, source_file, dest_file, config.aliases.components
            )
    result = normalize_import_paths(result, config.namespace)
    if origin is not None:
        result = add_origin_header(
            result,
            origin.subpath,
            origin.package_name,
            origin.version,
            date=origin.date,
            namespace=config.namespace,
        )
    if result != content:
        logger.debug("Transformed %s", dest_file or source_file or "<content>")
    return result

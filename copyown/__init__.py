"""
Transform component source files copied into a consumer project.

Components are distributed by copying their source into the project that uses
them ("copy & own") instead of installing a package.  The copies must work in
their new location, so this package rewrites them as plain text:

* imports from the shared package scope (``@microbuild/types``) become
  project-local alias imports (``@/lib/microbuild/types``);
* relative imports are re-pointed when a file moves to a different directory
  depth;
* PascalCase relative paths are normalized to the kebab-case file names used
  in the project;
* a provenance header records which package and version a file came from.

Every transform is a pure function of its inputs and performs no I/O.

Example::

    from copyown import Config, transform_imports

    transform_imports("import { Field } from '@microbuild/types';", Config())
    # -> "import { Field } from '@/lib/microbuild/types';"

The command line interface is built on :mod:`click`; see ``copyown.cli``.
"""

__all__ = [
    "Aliases",
    "Config",
    "OriginInfo",
    "OriginStamp",
    "add_origin_header",
    "extract_origin_info",
    "has_microbuild_imports",
    "load_config",
    "normalize_import_paths",
    "to_kebab_case",
    "to_pascal_case",
    "transform_file",
    "transform_imports",
    "transform_relative_imports",
    "transform_vform_imports",
]

from .casing import to_kebab_case, to_pascal_case  # noqa: F401
from .config import Aliases, Config, load_config  # noqa: F401
from .imports import has_microbuild_imports, transform_imports  # noqa: F401
from .normalize import normalize_import_paths  # noqa: F401
from .origin import OriginInfo, add_origin_header, extract_origin_info  # noqa: F401
from .pipeline import OriginStamp, transform_file  # noqa: F401
from .relative import transform_relative_imports, transform_vform_imports  # noqa: F401

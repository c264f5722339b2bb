"""
Rewrite imports of the shared packages to project-local aliases.

Copied files still import from the published package scope
(``@microbuild/types``, ``@microbuild/ui-form`` ...).  In the consumer
project those modules are copied next to the components, so every such
specifier has to point at the configured alias instead::

    import { Field } from '@microbuild/types';
    # becomes
    import { Field } from '@/lib/microbuild/types';

The mapping from subpackage to alias is fixed.  Specifiers naming an unknown
subpackage, or the bare scope, are left alone so the caller can decide
whether to warn about them.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .config import DEFAULT_SCOPE, Config
from .specifiers import ImportSpecifier, iter_specifiers, rewrite_specifiers

__all__ = [
    "LIB_SUBPACKAGES",
    "extract_microbuild_dependencies",
    "has_microbuild_imports",
    "import_mappings",
    "map_package_specifier",
    "transform_imports",
]

logger = logging.getLogger(__name__)

LIB_SUBPACKAGES = ("types", "services", "hooks", "utils")

# Component packages resolve below the components alias.
_COMPONENT_SUBPACKAGES = {
    "ui-interfaces": "",
    "ui-collections": "",
    "ui-form": "vform",
}


def _join(base: str, *parts: str) -> str:
    tail = "/".join(part.strip("/") for part in parts if part)
    if not tail:
        return base
    return f"{base.rstrip('/')}/{tail}"


def import_mappings(config: Config) -> Dict[str, str]:
    """Return the alias path each known subpackage maps to."""
    mappings = {name: _join(config.aliases.lib, name) for name in LIB_SUBPACKAGES}
    for name, folder in _COMPONENT_SUBPACKAGES.items():
        mappings[name] = _join(config.aliases.components, folder)
    return mappings


def _split_scoped(specifier: str, scope: str) -> Optional[List[str]]:
    """Return ``[subpackage, subpath]`` for an in-scope specifier."""
    prefix = scope.rstrip("/") + "/"
    if not specifier.startswith(prefix):
        return None
    subpackage, _, subpath = specifier[len(prefix):].partition("/")
    return [subpackage, subpath]


def _in_scope(specifier: str, scope: str) -> bool:
    scope = scope.rstrip("/")
    return specifier == scope or specifier.startswith(scope + "/")


def _map_specifier(specifier: str, scope: str, mappings: Dict[str, str]) -> Optional[str]:
    parts = _split_scoped(specifier, scope)
    if parts is None:
        return None
    subpackage, subpath = parts
    target = mappings.get(subpackage)
    if target is None:
        logger.debug("Leaving unknown subpackage import %r unchanged", specifier)
        return None
    return _join(target, subpath)


def map_package_specifier(specifier: str, config: Config) -> Optional[str]:
    """Translate one package specifier, or return ``None`` to keep it.

    ``@microbuild/types/file`` maps to ``<lib>/types/file``; anything outside
    the configured scope, the bare scope itself and unknown subpackages give
    ``None``.
    """
    return _map_specifier(specifier, config.scope, import_mappings(config))


def transform_imports(content: str, config: Config) -> str:
    """Rewrite every in-scope package import in ``content``.

    Both value and ``import type`` statements are handled.  Imports outside
    the scope (``react``, ``@mantine/core`` ...) are returned byte for byte.
    """
    mappings = import_mappings(config)

    def mapper(spec: ImportSpecifier) -> Optional[str]:
        return _map_specifier(spec.specifier, config.scope, mappings)

    return rewrite_specifiers(content, lambda spec: spec.is_package, mapper)


def has_microbuild_imports(content: str, scope: str = DEFAULT_SCOPE) -> bool:
    """Return ``True`` if any import specifier in ``content`` is in ``scope``."""
    return any(
        spec.is_package and _in_scope(spec.specifier, scope)
        for spec in iter_specifiers(content)
    )


def extract_microbuild_dependencies(content: str, scope: str = DEFAULT_SCOPE) -> List[str]:
    """Return the shared library modules ``content`` imports, sorted.

    Only library modules (``types``, ``services``, ``hooks``, ``utils``) are
    reported; component packages are installed through the registry instead.
    """
    found = set()
    for spec in iter_specifiers(content):
        parts = _split_scoped(spec.specifier, scope)
        if parts is not None and parts[0] in LIB_SUBPACKAGES:
            found.add(parts[0])
    return sorted(found)

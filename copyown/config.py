"""
Project configuration consumed by the transformation engine.

The configuration describes where copied components and shared library
modules live inside the consumer project.  It is created once per command
invocation (usually from ``microbuild.json`` at the project root) and then
passed explicitly into every transform call.  Instances are frozen; use
:meth:`Config.with_aliases` or :func:`dataclasses.replace` to derive a
modified copy.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

__all__ = [
    "Aliases",
    "Config",
    "ConfigError",
    "CONFIG_FILENAME",
    "DEFAULT_NAMESPACE",
    "DEFAULT_SCOPE",
    "alias_segments",
    "load_config",
    "resolve_alias",
]

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "microbuild.json"
DEFAULT_SCOPE = "@microbuild"
DEFAULT_NAMESPACE = "microbuild"
DEFAULT_MODEL = "copy-own"
DEFAULT_COMPONENTS_ALIAS = "@/components/ui"
DEFAULT_LIB_ALIAS = "@/lib/microbuild"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be interpreted."""


@dataclass(frozen=True)
class Aliases:
    components: str = DEFAULT_COMPONENTS_ALIAS
    lib: str = DEFAULT_LIB_ALIAS


@dataclass(frozen=True)
class Config:
    """Resolved project configuration.

    Attributes
    ----------
    model: str
        Distribution mode tag (``copy-own``).
    tsx: bool
        Whether the project uses TSX files.
    src_dir: bool
        Whether components live under a ``src/`` root.
    aliases: Aliases
        Path aliases for copied components and shared library modules.
    installed_lib: tuple[str, ...]
        Shared library modules already installed in the project.
    installed_components: tuple[str, ...]
        Components already installed in the project.
    scope: str
        Package scope whose imports are rewritten, e.g. ``@microbuild``.
    namespace: str
        Prefix of the header tags and directives, e.g. ``microbuild`` for
        ``@microbuild-origin``.
    """

    model: str = DEFAULT_MODEL
    tsx: bool = True
    src_dir: bool = False
    aliases: Aliases = field(default_factory=Aliases)
    installed_lib: Tuple[str, ...] = ()
    installed_components: Tuple[str, ...] = ()
    scope: str = DEFAULT_SCOPE
    namespace: str = DEFAULT_NAMESPACE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Build a configuration from the JSON shape written by ``init``.

        Keys use the camelCase spelling of the config file (``srcDir``,
        ``installedLib``); missing keys fall back to the defaults.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be an object, got {type(data).__name__}")
        raw_aliases = data.get("aliases") or {}
        if not isinstance(raw_aliases, dict):
            raise ConfigError("'aliases' must be an object")
        aliases = Aliases(
            components=str(raw_aliases.get("components", DEFAULT_COMPONENTS_ALIAS)),
            lib=str(raw_aliases.get("lib", DEFAULT_LIB_ALIAS)),
        )
        return cls(
            model=str(data.get("model", DEFAULT_MODEL)),
            tsx=bool(data.get("tsx", True)),
            src_dir=bool(data.get("srcDir", False)),
            aliases=aliases,
            installed_lib=_names(data.get("installedLib"), "installedLib"),
            installed_components=_names(data.get("installedComponents"), "installedComponents"),
            scope=str(data.get("scope", DEFAULT_SCOPE)),
            namespace=str(data.get("namespace", DEFAULT_NAMESPACE)),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "model": self.model,
            "tsx": self.tsx,
            "srcDir": self.src_dir,
            "aliases": {"components": self.aliases.components, "lib": self.aliases.lib},
            "installedLib": list(self.installed_lib),
            "installedComponents": list(self.installed_components),
        }
        if self.scope != DEFAULT_SCOPE:
            data["scope"] = self.scope
        if self.namespace != DEFAULT_NAMESPACE:
            data["namespace"] = self.namespace
        return data

    def with_aliases(self, components: Optional[str] = None, lib: Optional[str] = None) -> "Config":
        """Return a copy of this configuration with some aliases replaced."""
        aliases = Aliases(
            components=self.aliases.components if components is None else components,
            lib=self.aliases.lib if lib is None else lib,
        )
        return replace(self, aliases=aliases)


def _names(value: Optional[Iterable[Any]], key: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"'{key}' must be a list of names")
    return tuple(str(item) for item in value)


def load_config(path: Union[str, Path]) -> Config:
    """Read a configuration file.

    ``path`` may point at the JSON file itself or at the project directory
    containing ``microbuild.json``.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist.
    ConfigError
        If the file is not valid JSON or does not describe a configuration.
    """
    config_path = Path(path)
    if config_path.is_dir():
        config_path = config_path / CONFIG_FILENAME
    if not config_path.is_file():
        raise FileNotFoundError(config_path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    logger.debug("Loaded configuration from %s", config_path)
    return Config.from_dict(data)


def alias_segments(alias: str) -> List[str]:
    """Return the directory segments an alias points at.

    The alias marker is dropped: ``@/components/ui`` and ``~/components/ui``
    both give ``['components', 'ui']``.
    """
    segments = [part for part in alias.split("/") if part]
    if segments and segments[0] in {"@", "~"}:
        segments = segments[1:]
    elif segments and segments[0][:1] in {"@", "~"} and len(segments[0]) > 1:
        # '@components/ui' style aliases carry the marker on the first segment
        segments[0] = segments[0][1:]
    return segments


def resolve_alias(alias: str, root: Union[str, Path], src_dir: bool = False) -> Path:
    """Map an alias to a directory inside the project rooted at ``root``."""
    base = Path(root) / "src" if src_dir else Path(root)
    return base.joinpath(*alias_segments(alias))

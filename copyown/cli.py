"""
Command-line interface for the copyown package.

This module exposes three commands using :mod:`click`:

* ``transform`` – run the import transformation pipeline over one copied
  file and write the result.
* ``origin`` – print the provenance header of a file.
* ``status`` – list the files of a project that carry a provenance header.

``transform`` and ``status`` accept a ``--project-root`` option which
defaults to the current working directory.  The project root is where
``microbuild.json`` is looked up and what destination paths are expressed
relative to, e.g. ``components/ui/file-image.tsx``.
"""

from __future__ import annotations

import logging
import os
import pathlib
import sys

import click

from .config import CONFIG_FILENAME, Config, ConfigError, load_config
from .origin import extract_origin_info
from .pipeline import OriginStamp, transform_file

SOURCE_SUFFIXES = (".ts", ".tsx", ".js", ".jsx")


def resolve_root(project_root: str | None) -> pathlib.Path:
    """Return the absolute project root, defaulting to the working directory."""
    root = pathlib.Path(project_root) if project_root else pathlib.Path.cwd()
    if not root.is_dir():
        raise click.UsageError(f"Project root {root!s} does not exist or is not a directory")
    return root.resolve()


def read_config(root: pathlib.Path, config_path: str | None) -> Config:
    """Load the project configuration.

    An explicit ``config_path`` must exist.  Without one, ``microbuild.json``
    in the project root is used when present and the defaults otherwise.
    """
    if config_path is None:
        candidate = root / CONFIG_FILENAME
        if not candidate.is_file():
            return Config()
        config_path = str(candidate)
    try:
        return load_config(config_path)
    except FileNotFoundError as exc:
        raise click.UsageError(f"Configuration file {exc} not found") from exc
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def project_relative(path: pathlib.Path, root: pathlib.Path) -> str:
    """Express ``path`` relative to ``root`` when it lies inside it."""
    resolved = path.resolve()
    try:
        return resolved.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


@click.group()
@click.version_option(package_name="copyown")
@click.option("-v", "--verbose", is_flag=True, help="Log every rewritten import.")
def cli(verbose: bool) -> None:
    """Transform component files copied into a project.

    Rewrites package imports to local aliases, re-points relative imports,
    normalizes file name casing and stamps provenance headers.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command("transform", help="Transform a copied file and write the result.")
@click.argument("src", type=click.Path(exists=True, dir_okay=False))
@click.argument("dst", type=click.Path(dir_okay=False))
@click.option(
    "--project-root", "project_root", type=click.Path(), default=None,
    help="Root directory of the consumer project (defaults to current working directory).",
)
@click.option(
    "--config", "config_path", type=click.Path(), default=None,
    help=f"Configuration file (defaults to {CONFIG_FILENAME} in the project root).",
)
@click.option(
    "--source-path", "source_path", default=None,
    help="Path of SRC inside the source packages; enables re-pointing of relative imports.",
)
@click.option(
    "--dest-path", "dest_path", default=None,
    help="Path of DST inside the project (defaults to DST relative to the project root).",
)
@click.option("--vform", is_flag=True, help="SRC belongs to the shared form package.")
@click.option("--origin-package", "origin_package", default=None, help="Package to record in the header.")
@click.option("--origin-subpath", "origin_subpath", default=None, help="Component or module to record in the header.")
@click.option("--origin-version", "origin_version", default="1.0.0", show_default=True)
def transform_cmd(
    src: str,
    dst: str,
    project_root: str | None,
    config_path: str | None,
    source_path: str | None,
    dest_path: str | None,
    vform: bool,
    origin_package: str | None,
    origin_subpath: str | None,
    origin_version: str,
) -> None:
    """Transform ``SRC`` and write the result to ``DST``.

    Package imports are always rewritten and relative paths normalized.  With
    ``--source-path`` relative imports are also re-pointed for the move from
    the package layout to ``DST``.  With ``--origin-package`` and
    ``--origin-subpath`` a provenance header is added.
    """
    root = resolve_root(project_root)
    config = read_config(root, config_path)
    if (origin_package is None) != (origin_subpath is None):
        raise click.UsageError("--origin-package and --origin-subpath must be given together")
    dst_path = pathlib.Path(dst)
    if not dst_path.is_absolute():
        dst_path = root / dst_path
    stamp = None
    if origin_package is not None and origin_subpath is not None:
        stamp = OriginStamp(origin_subpath, origin_package, origin_version)
    try:
        content = pathlib.Path(src).read_text(encoding="utf-8")
        result = transform_file(
            content,
            config,
            source_file=source_path,
            dest_file=(dest_path or project_relative(dst_path, root)) if source_path else None,
            vform=vform,
            origin=stamp,
        )
        dst_path.parent.mkdir(parents=True, exist_ok=True)
        dst_path.write_text(result, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"Cannot transform {src}: {exc}") from exc
    click.echo(f"Wrote {project_relative(dst_path, root)}")


@cli.command("origin", help="Show the provenance header of a file.")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def origin_cmd(path: str) -> None:
    """Print origin, version and date recorded in ``PATH``."""
    try:
        content = pathlib.Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise click.ClickException(f"{path} is not valid UTF-8: {exc}") from exc
    info = extract_origin_info(content)
    if info is None:
        click.echo(f"{path}: no origin header")
        return
    click.echo(f"origin:  {info.origin or 'unknown'}")
    click.echo(f"version: {info.version or 'unknown'}")
    click.echo(f"date:    {info.date or 'unknown'}")


@cli.command("status", help="List files carrying a provenance header.")
@click.argument("directory", type=click.Path(exists=True, file_okay=False), default=".")
def status_cmd(directory: str) -> None:
    """Walk ``DIRECTORY`` and list every copied file with its origin.

    ``node_modules`` and hidden directories are skipped.
    """
    base = pathlib.Path(directory)
    found = 0
    for root, dirs, files in os.walk(base):
        dirs[:] = sorted(d for d in dirs if d != "node_modules" and not d.startswith("."))
        for filename in sorted(files):
            if not filename.endswith(SOURCE_SUFFIXES):
                continue
            file_path = pathlib.Path(root) / filename
            try:
                content = file_path.read_text(encoding="utf-8")
            except UnicodeDecodeError:
                click.echo(f"Skipping {file_path.relative_to(base).as_posix()}: not valid UTF-8", err=True)
                continue
            info = extract_origin_info(content)
            if info is None or info.origin is None:
                continue
            found += 1
            click.echo(
                f"{file_path.relative_to(base).as_posix()}  {info.origin}  "
                f"{info.version or 'unknown'}  {info.date or 'unknown'}"
            )
    if not found:
        click.echo("No files with origin headers found.")


def main(argv: list[str] | None = None) -> None:
    """Entrypoint for console_scripts.

    Allows the CLI to be executed via ``python -m copyown.cli`` or when
    installed through a ``console_scripts`` entry point.
    Click runs in standalone mode so that usage errors and
    :class:`click.ClickException` are reported as messages with an exit
    status instead of tracebacks.
    """
    cli.main(args=argv, prog_name="copyown")


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])

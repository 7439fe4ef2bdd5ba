"""Saving blueprints from the server into TOML files."""

from __future__ import annotations

import os
import stat
import tomllib
from typing import Sequence

from .core import CommandError, Context, comma_args
from .show import _check_blueprints_json, _fetch_change
from .simple import _api_errors, _check, _single_name


def _blueprint_name(data: str) -> str:
    """Return the ``name`` of a TOML blueprint, raising ValueError when it has none."""
    try:
        blueprint = tomllib.loads(data)
    except tomllib.TOMLDecodeError as err:
        raise ValueError(f"Unmarshal of blueprint failed: {err}") from err
    name = blueprint.get("name")
    if not isinstance(name, str):
        raise ValueError("no 'name' in blueprint")
    return name


def _resolve_target(filename: str, path: str) -> str:
    """Place ``filename`` under ``path`` when it is a directory, or use ``path`` itself."""
    if not path:
        return filename
    try:
        info = os.stat(path)
    except FileNotFoundError:
        # A path that looks like a directory has to exist already.
        if path.endswith("/"):
            raise FileNotFoundError(f"{path} does not exist") from None
        return path
    if stat.S_ISDIR(info.st_mode):
        return os.path.join(path, filename)
    return path


def _write_private(filename: str, data: str) -> None:
    """Write ``data`` to ``filename``, created with owner-only permissions."""
    try:
        fd = os.open(filename, os.O_CREAT | os.O_TRUNC | os.O_WRONLY, 0o600)
    except OSError as err:
        raise OSError(f"opening file {filename}: {err}") from err
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        try:
            handle.write(data)
        except OSError as err:
            raise OSError(f"writing TOML file: {err}") from err


def save_blueprint(data: str, commit: str, path: str) -> str:
    """Write a TOML blueprint to a file and return the file's name.

    The file is named after the blueprint, with spaces replaced by ``-`` and
    ``-COMMIT`` appended when ``commit`` is given. ``path`` may name an
    existing directory to save under, or a file to save to.

    Raises ValueError for an unreadable blueprint or an unusable name, and
    OSError when the file cannot be written.
    """
    name = _blueprint_name(data)

    filename = name.replace(" ", "-")
    if commit:
        filename = f"{filename}-{commit}"
    filename = _resolve_target(os.path.basename(filename + ".toml"), path)

    if os.path.basename(filename) == ".toml":
        raise ValueError(f"Invalid blueprint filename: {name}")

    _write_private(filename, data)
    return filename


def save_toml(ctx: Context, args: Sequence[str], commit: str, save_path: str) -> None:
    """Save the named blueprints, or one blueprint at ``commit``, to TOML files."""
    name = _single_name(ctx, args, commit)
    if name is not None:
        save_commit(ctx, name, commit, save_path)
        return

    names = comma_args(args)
    if ctx.json_output:
        _check_blueprints_json(ctx, "Save Error", names)

    # TOML keeps integer values from turning into floats in the saved file
    with _api_errors(ctx, "Save Error"):
        blueprints, resp = ctx.client.get_blueprints_toml(names)
    _check(ctx, resp)

    failure: CommandError | None = None
    for data in blueprints:
        try:
            save_blueprint(data, "", save_path)
        except (ValueError, OSError) as err:
            failure = ctx.fail(str(err))
    if failure is not None:
        raise failure


def save_commit(ctx: Context, name: str, commit: str, save_path: str) -> None:
    """Save the blueprint ``name`` as it was at ``commit``."""
    blueprint = _fetch_change(ctx, "Save Error", name, commit)
    if ctx.json_output:
        return
    try:
        save_blueprint(blueprint, commit, save_path)
    except (ValueError, OSError) as err:
        raise ctx.fail(str(err)) from err
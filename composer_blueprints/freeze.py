"""Showing and saving blueprints with their depsolved package versions."""

from __future__ import annotations

import os
from typing import Any, Iterable

from .core import APIError, CommandError, Context, comma_args
from .save import _blueprint_name, _resolve_target, _write_private


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} is not a string: {value!r}")
    return value


def _parts(blueprint: Any) -> tuple[str, str, list[str]]:
    """Return the name, version and ``NAME-VERSION`` entries of a frozen blueprint."""
    if not isinstance(blueprint, dict):
        raise ValueError("blueprint is not an object")
    inner = blueprint.get("blueprint")
    if isinstance(inner, dict):
        blueprint = inner

    name = _text(blueprint, "name")
    version = _text(blueprint, "version")

    entries = []
    for key in ("modules", "packages"):
        items = blueprint.get(key) or []
        if not isinstance(items, list):
            raise ValueError(f"{key} is not a list")
        for item in items:
            if not isinstance(item, dict):
                raise ValueError(f"entry in {key} is not an object")
            entries.append(f"{_text(item, 'name')}-{_text(item, 'version')}")
    return name, version, entries


def freeze(ctx: Context, args: Iterable[str]) -> None:
    """Print the depsolved module and package versions of the named blueprints."""
    names = comma_args(args)
    try:
        blueprints, errors = ctx.client.get_frozen_blueprints_json(names)
    except APIError as err:
        raise ctx.fail(f"Save Error: {err}") from err

    failure: CommandError | None = ctx.report(errors) if errors else None

    for blueprint in blueprints:
        try:
            name, version, entries = _parts(blueprint)
        except ValueError as err:
            failure = ctx.fail(f"decoding blueprint: {err}")
            continue

        if version:
            print(f"blueprint: {name} v{version}", file=ctx.stdout)
        else:
            print(f"blueprint: {name}", file=ctx.stdout)
        for entry in entries:
            print(f"    {entry}", file=ctx.stdout)

    # Any error fails the command, even when other blueprints succeeded
    if failure is not None:
        raise failure


def freeze_show(ctx: Context, args: Iterable[str]) -> None:
    """Print the complete frozen blueprints in TOML format."""
    names = comma_args(args)
    if ctx.json_output:
        try:
            _, errors = ctx.client.get_frozen_blueprints_json(names)
        except APIError as err:
            raise ctx.fail(f"Save Error: {err}") from err
        if errors:
            raise ctx.report(errors)
        return

    try:
        blueprints, resp = ctx.client.get_frozen_blueprints_toml(names)
    except APIError as err:
        raise ctx.fail(f"Show Error: {err}") from err
    if resp is not None:
        raise ctx.fail(f"Show Error: {', '.join(resp.all_errors())}")

    for blueprint in blueprints:
        print(blueprint, file=ctx.stdout)


def _save_frozen(data: str, save_path: str) -> str:
    name = _blueprint_name(data)

    # Replace spaces and drop anything that looks like a path.
    filename = os.path.basename(name.replace(" ", "-") + ".frozen.toml")
    if filename in ("/", ".", ".."):
        raise ValueError(f"Invalid blueprint filename: {name}")

    filename = _resolve_target(filename, save_path)
    _write_private(filename, data)
    return filename


def freeze_save(ctx: Context, args: Iterable[str], save_path: str) -> None:
    """Save the frozen blueprints to ``NAME.frozen.toml`` files, or under ``save_path``."""
    names = comma_args(args)
    if ctx.json_output:
        try:
            _, errors = ctx.client.get_frozen_blueprints_json(names)
        except APIError as err:
            raise ctx.fail(f"Save Error: {err}") from err
        if errors:
            raise ctx.report(errors)

    try:
        blueprints, resp = ctx.client.get_frozen_blueprints_toml(names)
    except APIError as err:
        raise ctx.fail(f"Save Error: {err}") from err
    if resp is not None and not resp.status:
        raise ctx.report(resp.errors)

    failure: CommandError | None = None
    for data in blueprints:
        try:
            _save_frozen(data, save_path)
        except (ValueError, OSError) as err:
            failure = ctx.fail(str(err))

    if failure is not None:
        raise failure
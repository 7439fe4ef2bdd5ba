"""Showing blueprints in TOML format."""

from __future__ import annotations

from typing import Sequence

from .core import Context, comma_args
from .simple import _api_errors, _check, _single_name


def _check_blueprints_json(ctx: Context, label: str, names: list[str]) -> None:
    """Request the blueprints as JSON and raise on any error the server reports."""
    with _api_errors(ctx, label):
        errors = ctx.client.get_blueprints_json(names)[1]
    if errors:
        raise ctx.report(errors)


def _fetch_change(ctx: Context, label: str, name: str, commit: str) -> str | None:
    """Return the TOML of ``name`` at ``commit``; in JSON mode only check for errors."""
    if not ctx.json_output:
        with _api_errors(ctx, label):
            blueprint, resp = ctx.client.get_blueprint_change_toml(name, commit)
        _check(ctx, resp)
        return blueprint
    with _api_errors(ctx, label):
        resp = ctx.client.get_blueprint_change_json(name, commit)[1]
    if resp is not None:
        raise ctx.report(resp.errors)
    return None


def show(ctx: Context, args: Sequence[str], commit: str) -> None:
    """Print the named blueprints, or one blueprint at ``commit``, as TOML."""
    name = _single_name(ctx, args, commit)
    if name is not None:
        return show_commit(ctx, name, commit)

    names = comma_args(args)
    if ctx.json_output:
        return _check_blueprints_json(ctx, "Show Error", names)

    with _api_errors(ctx, "Show Error"):
        blueprints, resp = ctx.client.get_blueprints_toml(names)
    # Errors are reported first, but whatever was found is still printed.
    failed = resp is not None and not resp.status
    failure = ctx.report(resp.errors) if failed else None
    for blueprint in blueprints:
        print(blueprint, file=ctx.stdout)
    if failure is not None:
        raise failure
    return None


def show_commit(ctx: Context, name: str, commit: str) -> None:
    """Print the blueprint ``name`` as it was at ``commit``."""
    blueprint = _fetch_change(ctx, "Show Error", name, commit)
    if not ctx.json_output:
        print(blueprint, file=ctx.stdout)
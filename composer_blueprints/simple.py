"""Blueprint commands that map onto a single API request."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator, Sequence

from .core import APIError, APIResponse, CommandError, Context, comma_args


@contextmanager
def _api_errors(ctx: Context, label: str) -> Iterator[None]:
    """Turn an APIError raised by the client into a reported command failure."""
    try:
        yield
    except APIError as err:
        raise ctx.fail(f"{label}: {err}") from err


def _check(ctx: Context, resp: APIResponse | None) -> None:
    """Report and raise the errors of a response whose status is false."""
    if resp is not None and not resp.status:
        raise ctx.report(resp.errors)


def _single_name(ctx: Context, args: Sequence[str], commit: str) -> str | None:
    """Return the one blueprint name that goes with ``commit``, or None without a commit."""
    if not commit:
        return None
    if len(args) > 1:
        raise ctx.fail("--commit only supports one blueprint name at a time")
    return args[0]


def _request(ctx: Context, label: str, request: Callable[..., APIResponse | None], *args: str) -> None:
    with _api_errors(ctx, label):
        resp = request(*args)
    _check(ctx, resp)


def changes(ctx: Context, args: Iterable[str]) -> None:
    """Show the change history of each named blueprint."""
    names = comma_args(args)
    with _api_errors(ctx, "Changes Error"):
        blueprints, errors = ctx.client.get_blueprints_changes(names)

    failure: CommandError | None = ctx.report(errors) if errors else None

    for blueprint in blueprints:
        print(blueprint["name"], file=ctx.stdout)
        for change in blueprint.get("changes") or []:
            revision = change.get("revision")
            suffix = f" revision {revision}" if revision is not None else ""
            print(f"    {change['timestamp']}  {change['commit']}{suffix}", file=ctx.stdout)
            print(f"    {change['message']}\n", file=ctx.stdout)

    if failure is not None:
        raise failure


def delete(ctx: Context, name: str) -> None:
    """Delete a blueprint from the server."""
    _request(ctx, "Delete Error", ctx.client.delete_blueprint, name)


def list_blueprints(ctx: Context) -> None:
    """Print the names of all blueprints, sorted."""
    with _api_errors(ctx, "List Error"):
        names, resp = ctx.client.list_blueprints()
    _check(ctx, resp)
    for name in sorted(names):
        print(name, file=ctx.stdout)


def _push_files(ctx: Context, args: Iterable[str], send: Callable[[str], APIResponse | None]) -> None:
    failure: CommandError | None = None
    for filename in comma_args(args):
        try:
            data = Path(filename).read_text(encoding="utf-8")
        except OSError:
            failure = ctx.fail(f"Missing blueprint file: {filename}")
            continue
        try:
            resp = send(data)
        except APIError as err:
            failure = ctx.fail(f"Push TOML: {err}")
            continue
        if resp is not None and not resp.status:
            failure = ctx.report(resp.errors)
    if failure is not None:
        raise failure


def push(ctx: Context, args: Iterable[str]) -> None:
    """Push TOML blueprint files to the server."""
    _push_files(ctx, args, ctx.client.push_blueprint_toml)


def tag(ctx: Context, name: str) -> None:
    """Tag the most recent change of a blueprint as a release."""
    _request(ctx, "Tag Error", ctx.client.tag_blueprint, name)


def undo(ctx: Context, name: str, commit: str) -> None:
    """Revert a blueprint to an earlier commit."""
    _request(ctx, "Undo Error", ctx.client.undo_blueprint, name, commit)


def workspace(ctx: Context, args: Iterable[str]) -> None:
    """Push TOML blueprint files to the temporary workspace."""
    _push_files(ctx, args, ctx.client.push_blueprint_workspace_toml)
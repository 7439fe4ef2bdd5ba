"""Listing the differences between two commits of a blueprint."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from typing import Sequence

from .core import APIError, Context
from .save import save_blueprint

WORKSPACE = "WORKSPACE"
NEWEST = "NEWEST"
DEFAULT_DIFF_ARGS = ("--color", "-u")


def _newest_commit(ctx: Context, name: str) -> str:
    """Return the most recent commit of blueprint ``name``."""
    blueprints, errors = ctx.client.get_blueprints_changes([name])
    if errors:
        raise ValueError(str(errors[0]))
    if not blueprints:
        raise ValueError("no blueprints")
    changes = blueprints[0].get("changes") or []
    if not changes:
        raise ValueError(f"no NEWEST commit for {name}")
    return changes[0]["commit"]


def get_blueprint(ctx: Context, name: str, commit: str) -> str:
    """Return the TOML of blueprint ``name`` at a commit hash, ``NEWEST`` or ``WORKSPACE``.

    Raises APIError when a request fails and ValueError when the server
    reports an error or has nothing to return.
    """
    if commit == WORKSPACE:
        # Without workspace changes this is the latest commit
        blueprints, resp = ctx.client.get_blueprints_toml([name])
        if resp is not None and not resp.status:
            raise ValueError(", ".join(resp.all_errors()))
        if not blueprints:
            raise ValueError("no blueprints")
        return blueprints[0]
    if commit == NEWEST:
        commit = _newest_commit(ctx, name)

    blueprint, resp = ctx.client.get_blueprint_change_toml(name, commit)
    if resp is not None and not resp.status:
        raise ValueError(", ".join(resp.all_errors()))
    return blueprint


def get_blueprint_json(ctx: Context, name: str, commit: str) -> None:
    """Request blueprint ``name`` at ``commit`` in JSON, for display by the client.

    Raises the same errors as :func:`get_blueprint`.
    """
    if commit == WORKSPACE:
        blueprints, errors = ctx.client.get_blueprints_json([name])
        if errors:
            raise ValueError(str(errors[0]))
        if not blueprints:
            raise ValueError("no blueprints")
        return
    if commit == NEWEST:
        commit = _newest_commit(ctx, name)

    _, resp = ctx.client.get_blueprint_change_json(name, commit)
    if resp is not None and not resp.status:
        raise ValueError(", ".join(resp.all_errors()))


def run_diff(
    from_blueprint: str,
    from_commit: str,
    to_blueprint: str,
    to_commit: str,
    diff_args: Sequence[str],
) -> str:
    """Run the system diff utility on two blueprints and return its output.

    The blueprints are written to a temporary directory that is removed
    afterwards. Exit status 1 (files differ) is not an error; a higher one
    raises RuntimeError, as does a missing diff utility.
    """
    with tempfile.TemporaryDirectory(prefix="bp-diff-") as tmp_dir:
        from_file = os.path.basename(save_blueprint(from_blueprint, from_commit, tmp_dir))
        to_file = os.path.basename(save_blueprint(to_blueprint, to_commit, tmp_dir))

        if shutil.which("diff") is None:
            raise RuntimeError("The diff utility is required, please install it")

        try:
            result = subprocess.run(
                ["diff", *diff_args, from_file, to_file],
                cwd=tmp_dir,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as err:
            raise RuntimeError(f"diff error: {err}") from err

    # 0 means same files, 1 different files, 2 trouble
    if result.returncode > 1:
        detail = result.stderr.strip()
        message = f"diff error: exit status {result.returncode}"
        raise RuntimeError(f"{message}: {detail}" if detail else message)
    return result.stdout


def diff(ctx: Context, args: Sequence[str]) -> None:
    """Show the differences: BLUEPRINT FROM-COMMIT TO-COMMIT [DIFF-ARG ...]."""
    args = list(args)
    if len(args) < 3:
        raise ctx.fail("diff requires BLUEPRINT FROM-COMMIT TO-COMMIT")
    name, from_commit, to_commit = args[:3]
    if from_commit == WORKSPACE:
        raise ctx.fail("FROM-COMMIT cannot be WORKSPACE")

    if ctx.json_output:
        for commit in (from_commit, to_commit):
            try:
                get_blueprint_json(ctx, name, commit)
            except (APIError, ValueError) as err:
                raise ctx.fail(str(err)) from err
        return

    try:
        from_blueprint = get_blueprint(ctx, name, from_commit)
        to_blueprint = get_blueprint(ctx, name, to_commit)
    except (APIError, ValueError) as err:
        raise ctx.fail(str(err)) from err

    diff_args = args[3:] or list(DEFAULT_DIFF_ARGS)
    try:
        output = run_diff(from_blueprint, from_commit, to_blueprint, to_commit, diff_args)
    except (ValueError, OSError, RuntimeError) as err:
        raise ctx.fail(str(err)) from err
    ctx.stdout.write(output)
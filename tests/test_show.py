import io
from types import SimpleNamespace
from unittest.mock import Mock

from composer_blueprints.core import APIError, APIResponse, CommandError, Context
from composer_blueprints.show import show, show_commit

COMMIT = "8ce158ef37d86071128fd548663eb62d4319e7ec"
OTHER_COMMIT = "fda3a8f9e589d1c423748b0408e5b71d9b769164"

SIMPLE_TOML = """description = "simple blueprint"
groups = []
modules = []
name = "simple"
version = "0.1.0"

[[packages]]
  name = "bash"
  version = "*"
"""

SIMPLE_JSON = {
    "description": "simple blueprint",
    "groups": [],
    "modules": [],
    "name": "simple",
    "packages": [{"name": "bash", "version": "*"}],
    "version": "0.1.0",
}

UNKNOWN = [APIError("UnknownBlueprint", "unknown: ")]


def invoke(action, json_output=False, **replies):
    """Run ``action`` against a stub client and collect what it printed and whether it failed."""
    client = SimpleNamespace()
    for method, reply in replies.items():
        setattr(client, method, Mock(side_effect=reply) if isinstance(reply, Exception) else Mock(return_value=reply))
    out, err = io.StringIO(), io.StringIO()
    failed = False
    try:
        action(Context(client=client, json_output=json_output, stdout=out, stderr=err))
    except CommandError:
        failed = True
    return SimpleNamespace(client=client, out=out.getvalue(), err=err.getvalue(), failed=failed)


def test_show():
    result = invoke(lambda ctx: show(ctx, ["simple"], ""), get_blueprints_toml=([SIMPLE_TOML], None))

    assert not result.failed
    assert "{" not in result.out
    for text in ("simple blueprint", "bash", "0.1.0", "[[packages]]"):
        assert text in result.out
    assert result.err == ""
    result.client.get_blueprints_toml.assert_called_once_with(["simple"])


def test_show_several_names():
    result = invoke(lambda ctx: show(ctx, ["simple,other"], ""), get_blueprints_toml=([SIMPLE_TOML, 'name = "other"'], None))

    assert result.out == SIMPLE_TOML + "\n" + 'name = "other"\n'
    result.client.get_blueprints_toml.assert_called_once_with(["simple", "other"])


def test_show_json():
    result = invoke(lambda ctx: show(ctx, ["simple"], ""), json_output=True, get_blueprints_json=([SIMPLE_JSON], []))

    assert not result.failed
    result.client.get_blueprints_json.assert_called_once_with(["simple"])
    assert result.err == ""


def test_show_error():
    resp = APIResponse(status=False, errors=UNKNOWN)
    result = invoke(lambda ctx: show(ctx, ["unknown"], ""), get_blueprints_toml=([], resp))

    assert result.failed
    assert result.out == ""
    assert "UnknownBlueprint:" in result.err


def test_show_partial_error_still_prints():
    resp = APIResponse(status=False, errors=UNKNOWN)
    result = invoke(lambda ctx: show(ctx, ["simple,unknown"], ""), get_blueprints_toml=([SIMPLE_TOML], resp))

    assert result.failed
    assert "simple blueprint" in result.out
    assert "UnknownBlueprint: unknown: " in result.err


def test_show_error_json():
    result = invoke(lambda ctx: show(ctx, ["unknown"], ""), json_output=True, get_blueprints_json=([], UNKNOWN))

    assert result.failed
    assert "UnknownBlueprint: unknown: " in result.err


def test_show_api_error():
    result = invoke(
        lambda ctx: show(ctx, ["simple"], ""), get_blueprints_toml=APIError("HTTPError", "connection refused")
    )

    assert result.failed
    assert "Show Error: HTTPError: connection refused" in result.err


def test_show_commit():
    result = invoke(lambda ctx: show(ctx, ["simple"], COMMIT), get_blueprint_change_toml=(SIMPLE_TOML, None))

    assert not result.failed
    assert "{" not in result.out
    assert "simple blueprint" in result.out
    assert "[[packages]]" in result.out
    assert result.err == ""
    result.client.get_blueprint_change_toml.assert_called_once_with("simple", COMMIT)


def test_show_commit_json():
    result = invoke(
        lambda ctx: show(ctx, ["simple"], COMMIT), json_output=True, get_blueprint_change_json=(SIMPLE_JSON, None)
    )

    assert not result.failed
    result.client.get_blueprint_change_json.assert_called_once_with("simple", COMMIT)
    assert result.err == ""


def test_show_commit_unknown_blueprint():
    resp = APIResponse(status=False, errors=[APIError("UnknownCommit", "Unknown blueprint")])
    result = invoke(lambda ctx: show(ctx, ["unknown"], OTHER_COMMIT), get_blueprint_change_toml=("", resp))

    assert result.failed
    assert result.out == ""
    assert "UnknownCommit:" in result.err
    assert "Unknown blueprint" in result.err


def test_show_commit_unknown_commit():
    resp = APIResponse(status=False, errors=[APIError("UnknownCommit", "Unknown commit")])
    result = invoke(lambda ctx: show_commit(ctx, "simple", OTHER_COMMIT), get_blueprint_change_toml=("", resp))

    assert result.failed
    assert "UnknownCommit: Unknown commit" in result.err


def test_show_commit_old_server():
    missing_route = APIError("HTTPError", "/blueprints/change/ is not provided by this server")
    result = invoke(lambda ctx: show(ctx, ["simple"], OTHER_COMMIT), get_blueprint_change_toml=missing_route)

    assert result.failed
    assert result.out == ""
    assert "/blueprints/change/ is not provided by this server" in result.err


def test_show_commit_only_one_name():
    result = invoke(lambda ctx: show(ctx, ["simple", "other"], COMMIT))

    assert result.failed
    assert "--commit only supports one blueprint name at a time" in result.err
    assert vars(result.client) == {}
# composer-blueprints

Blueprint commands for a composer (image builder) server. Each command is a
plain function that takes a `core.Context`, asks the context's client for
blueprint data and prints what a person at a terminal wants to see.

Errors the server reports are written to standard error as
`ERROR: ID: message`. A command that met any error raises
`core.CommandError` once it has done all the work it could: for example
`changes` still prints the history of the blueprints that were found before
raising for the ones that were not.

## Commands

| Function | What it does |
| --- | --- |
| `simple.list_blueprints(ctx)` | Print the sorted names of all blueprints |
| `simple.changes(ctx, args)` | Print the change history of each blueprint |
| `simple.delete(ctx, name)` | Delete a blueprint |
| `simple.push(ctx, args)` | Push TOML blueprint files to the server |
| `simple.workspace(ctx, args)` | Push TOML blueprint files to the workspace |
| `simple.tag(ctx, name)` | Tag the newest change of a blueprint as a release |
| `simple.undo(ctx, name, commit)` | Revert a blueprint to an earlier commit |
| `show.show(ctx, args, commit)` | Print blueprints in TOML, or one blueprint at `commit` |
| `show.show_commit(ctx, name, commit)` | Print one blueprint as it was at `commit` |
| `save.save_toml(ctx, args, commit, save_path)` | Save blueprints as `NAME.toml` files |
| `save.save_commit(ctx, name, commit, save_path)` | Save one blueprint at `commit` as `NAME-COMMIT.toml` |
| `depsolve.depsolve(ctx, args)` | Print every package each blueprint pulls in |
| `freeze.freeze(ctx, args)` | Print the exact module and package versions |
| `freeze.freeze_show(ctx, args)` | Print the frozen blueprints in TOML |
| `freeze.freeze_save(ctx, args, save_path)` | Save frozen blueprints as `NAME.frozen.toml` |
| `diff.diff(ctx, args)` | Compare two blueprint commits with the system `diff` |

Where a command takes `args`, each item may itself be a comma separated list
of names or files; `core.comma_args` does the splitting:

```python
from composer_blueprints.core import comma_args

comma_args(["tmux-image,http-server", "nfs-server"])
# ['tmux-image', 'http-server', 'nfs-server']
```

`show` and `save_toml` accept only one blueprint name when a commit is given.

Packages printed by `depsolve` are `depsolve.Package` values, shown as
`NAME-VERSION-RELEASE.ARCH`, with `EPOCH:` in front when the epoch is not 0.

## The context and the client

`Context(client, json_output=False, stdout=sys.stdout, stderr=sys.stderr)`
holds what a command runs with. The package does not talk HTTP itself; the
client is any object with these methods, which raises `core.APIError` when a
request cannot be completed:

| Method | Returns |
| --- | --- |
| `list_blueprints()` | `(names, APIResponse or None)` |
| `get_blueprints_changes(names)` | `(blueprints, [APIError, ...])` |
| `delete_blueprint(name)` | `APIResponse or None` |
| `push_blueprint_toml(data)` | `APIResponse or None` |
| `push_blueprint_workspace_toml(data)` | `APIResponse or None` |
| `tag_blueprint(name)` | `APIResponse or None` |
| `undo_blueprint(name, commit)` | `APIResponse or None` |
| `get_blueprints_toml(names)` | `([toml_text, ...], APIResponse or None)` |
| `get_blueprints_json(names)` | `(blueprints, [APIError, ...])` |
| `get_blueprint_change_toml(name, commit)` | `(toml_text, APIResponse or None)` |
| `get_blueprint_change_json(name, commit)` | `(blueprint, APIResponse or None)` |
| `depsolve_blueprints(names)` | `(results, [APIError, ...])` |
| `get_frozen_blueprints_json(names)` | `(blueprints, [APIError, ...])` |
| `get_frozen_blueprints_toml(names)` | `([toml_text, ...], APIResponse or None)` |

`APIResponse(status, errors)` carries a status flag and a list of
`APIError(id, msg)`; `all_errors()` gives them as `ID: message` strings.

When `json_output` is set, the commands that display data make the JSON
request instead and only check it for errors; showing the JSON is left to the
client.

## Saving blueprints

`save.save_blueprint(data, commit, path)` writes a TOML blueprint to disk,
readable by its owner only, and returns the filename it used:

- with no `path`, the file goes in the current directory as the blueprint's
  name with spaces turned into `-`, plus `-COMMIT` when a commit is given,
  plus `.toml`;
- when `path` is an existing directory the file goes inside it;
- any other `path` is used as the filename itself;
- a `path` ending in `/` that does not exist is an error.

It raises `ValueError` for TOML it cannot read, a blueprint without a `name`
or a name that leaves no filename, and `OSError` when the file cannot be
written.

```python
from composer_blueprints.save import save_blueprint

save_blueprint('name = "simple"\nversion = "0.1.0"\n', "", "/var/tmp")
# '/var/tmp/simple.toml'
```

## Comparing commits

`diff.diff(ctx, [name, from_commit, to_commit, *diff_args])` accepts a commit
hash or `NEWEST` for `from_commit`, and a hash, `NEWEST` or `WORKSPACE` for
`to_commit`. Extra arguments go straight to the system `diff` utility, which
must be installed; without any, `--color -u` is used. The output of `diff` is
written to the context's stdout once it has finished. `diff.run_diff` does
the comparison on its own and returns that output.

## What this package does not do

There is no HTTP client for the composer API and no command-line program:
you supply the client object and call the functions from your own code.

## Tests

```
pip install -e .[test]
pytest
```
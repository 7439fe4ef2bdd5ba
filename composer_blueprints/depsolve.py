"""Depsolving blueprints and listing the packages they pull in."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from .core import APIError, CommandError, Context, comma_args


@dataclass(frozen=True)
class Package:
    """A resolved package with its full NEVRA."""

    name: str = ""
    epoch: int = 0
    version: str = ""
    release: str = ""
    arch: str = ""

    def __str__(self) -> str:
        nvra = f"{self.name}-{self.version}-{self.release}.{self.arch}"
        if self.epoch == 0:
            return nvra
        return f"{self.epoch}:{nvra}"


def _field(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind) or isinstance(value, bool) and kind is not bool:
        raise ValueError(f"field {key!r} has the wrong type: {value!r}")
    return value


def _mapping(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} is not an object")
    return value


def _parse(result: Any) -> tuple[str, str, list[Package]]:
    """Pull the blueprint name, version and dependencies out of a depsolve result."""
    result = _mapping(result, "depsolved blueprint")
    blueprint = _mapping(result.get("blueprint"), "blueprint")
    name = _field(blueprint, "name", str, "")
    version = _field(blueprint, "version", str, "")

    dependencies = result.get("dependencies") or []
    if not isinstance(dependencies, list):
        raise ValueError("dependencies is not a list")
    packages = []
    for dep in dependencies:
        dep = _mapping(dep, "dependency")
        packages.append(
            Package(
                name=_field(dep, "name", str, ""),
                epoch=_field(dep, "epoch", int, 0),
                version=_field(dep, "version", str, ""),
                release=_field(dep, "release", str, ""),
                arch=_field(dep, "arch", str, ""),
            )
        )
    return name, version, packages


def depsolve(ctx: Context, args: Iterable[str]) -> None:
    """Depsolve the named blueprints and print their package lists."""
    names = comma_args(args)
    try:
        results, errors = ctx.client.depsolve_blueprints(names)
    except APIError as err:
        raise ctx.fail(f"Depsolve Error: {err}") from err

    failure: CommandError | None = ctx.report(errors) if errors else None

    for result in results:
        try:
            name, version, packages = _parse(result)
        except ValueError as err:
            failure = ctx.fail(f"decoding depsolved blueprint: {err}")
            continue
        print(f"blueprint: {name} v{version}", file=ctx.stdout)
        for package in packages:
            print(f"    {package}", file=ctx.stdout)

    # Any error fails the command, even when other blueprints succeeded
    if failure is not None:
        raise failure
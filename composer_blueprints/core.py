"""Shared pieces for the blueprint commands: errors, responses and the run context."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Any, Iterable, TextIO


class APIError(Exception):
    """An error reported by the API server, also raised by clients when a request fails."""

    def __init__(self, id: str, msg: str) -> None:
        super().__init__(id, msg)
        self.id = id
        self.msg = msg

    def __str__(self) -> str:
        return f"{self.id}: {self.msg}"

    def __repr__(self) -> str:
        return f"APIError(id={self.id!r}, msg={self.msg!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, APIError):
            return NotImplemented
        return (self.id, self.msg) == (other.id, other.msg)

    def __hash__(self) -> int:
        return hash((self.id, self.msg))


@dataclass
class APIResponse:
    """The status response returned by requests that change server state."""

    status: bool = True
    errors: list[APIError] = field(default_factory=list)

    def all_errors(self) -> list[str]:
        """Return every error as an ``ID: message`` string."""
        return [str(error) for error in self.errors]


class CommandError(Exception):
    """Raised when a command fails; details have already been written to stderr."""


@dataclass
class Context:
    """What a command runs with: the API client, output streams and output mode.

    The client raises :class:`APIError` when a request cannot be completed and
    returns decoded JSON data, :class:`APIResponse` objects or lists of
    :class:`APIError` as the server reports them.
    """

    client: Any
    json_output: bool = False
    stdout: TextIO = field(default_factory=lambda: sys.stdout)
    stderr: TextIO = field(default_factory=lambda: sys.stderr)

    def report(self, errors: Iterable[APIError]) -> CommandError:
        """Write each server error to stderr and return the error to raise."""
        messages = [str(error) for error in errors]
        for message in messages:
            print(f"ERROR: {message}", file=self.stderr)
        return CommandError("; ".join(messages))

    def fail(self, message: str) -> CommandError:
        """Write ``message`` (if any) to stderr and return the error to raise."""
        message = message.rstrip("\n")
        if message:
            print(f"ERROR: {message}", file=self.stderr)
        return CommandError(message)


def comma_args(args: Iterable[str]) -> list[str]:
    """Split arguments that may hold comma separated lists into single names."""
    return [part for arg in args for part in arg.split(",") if part]
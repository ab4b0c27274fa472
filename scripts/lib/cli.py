"""Shared plumbing for the review publisher scripts."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Iterator
from typing import Mapping, TextIO


class EnvError(ValueError):
    """Required environment variable missing or malformed."""


def notice(message: str) -> None:
    """Notice."""
    print(f"::notice::{message}", file=sys.stderr)


def error(prog: str, message: object) -> None:
    print(f"{prog}: {message}", file=sys.stderr)


def parse_env(name: str, *, required: bool, environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    value = (env.get(name) or "").strip()
    if required and not value:
        raise EnvError(f"{name} must be set")
    return value


def parse_env_int(name: str, *, required: bool, environ: Mapping[str, str] | None = None) -> int:
    value = parse_env(name, required=required, environ=environ)
    try:
        return int(value)
    except ValueError as exc:
        raise EnvError(f"{name} must be integer: {exc}") from exc


def tee_lines(lines: Iterable[bytes], out: TextIO) -> Iterator[bytes]:
    """Echo every line to `out` while passing it through (--show)."""
    for line in lines:
        out.write(line.decode("utf-8", errors="replace"))
        out.flush()
        yield line

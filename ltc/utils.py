"""
CLI Utilities

Duration parsing and click helpers shared by ltc commands.
"""

import re
from datetime import timedelta
from typing import Optional, Union

import click

from ltc.constants import START_COMMAND_TERMINATOR

_BARE_SECONDS = re.compile(r"\d+(?:\.\d+)?")
_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_DURATION_UNITS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration like "2m", "1m30s", "500ms" or bare seconds ("90").

    Args:
        value: Duration string

    Returns:
        Parsed timedelta

    Raises:
        ValueError: If the string is not a duration
    """
    value = value.strip()
    if not value:
        raise ValueError("Empty duration")

    if _BARE_SECONDS.fullmatch(value):
        return timedelta(seconds=float(value))

    position = 0
    total = timedelta()
    for match in _DURATION_PART.finditer(value):
        if match.start() != position:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()

    if position != len(value):
        raise ValueError(f"Invalid duration: {value}")

    return total


class DurationParamType(click.ParamType):
    """Click parameter accepting durations such as 30s or 2m."""

    name = "duration"

    def convert(
        self,
        value: Union[str, timedelta],
        param: Optional[click.Parameter],
        ctx: Optional[click.Context],
    ) -> timedelta:
        if isinstance(value, timedelta):
            return value
        try:
            return parse_duration(value)
        except ValueError:
            self.fail(f"{value!r} is not a valid duration (e.g. 30s, 2m)", param, ctx)


DURATION = DurationParamType()


class TerminatedCommand(click.Command):
    """
    Command that keeps everything after '--' as raw tokens.

    Click swallows the '--' terminator, so the tokens after it are stored in
    ctx.meta and handed back by positional_args() with the terminator in
    place.
    """

    META_KEY = "ltc.terminated_args"

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if START_COMMAND_TERMINATOR in args:
            index = args.index(START_COMMAND_TERMINATOR)
            ctx.meta[self.META_KEY] = args[index + 1 :]
            args = args[:index]
        return super().parse_args(ctx, args)


def positional_args(ctx: click.Context, args: tuple[str, ...]) -> list[str]:
    """Rebuild positionals, re-inserting '--' and the tokens after it."""
    positionals = list(args)
    terminated = ctx.meta.get(TerminatedCommand.META_KEY)
    if terminated is not None:
        positionals.append(START_COMMAND_TERMINATOR)
        positionals.extend(terminated)
    return positionals

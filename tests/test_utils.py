"""Tests for CLI utilities."""

from datetime import timedelta

import click
import pytest
from click.testing import CliRunner

from ltc.utils import DURATION, TerminatedCommand, parse_duration, positional_args


class TestParseDuration:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2m", timedelta(minutes=2)),
            ("1s", timedelta(seconds=1)),
            ("500ms", timedelta(milliseconds=500)),
            ("1m30s", timedelta(seconds=90)),
            ("1h", timedelta(hours=1)),
            ("1.5s", timedelta(milliseconds=1500)),
            ("90", timedelta(seconds=90)),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "soon", "5x", "m5", "1m 30s", "inf", "nan"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)

    def test_click_type_rejects_bad_values(self):
        @click.command()
        @click.option("--timeout", type=DURATION, default="2m")
        def command(timeout):
            click.echo(repr(timeout))

        runner = CliRunner()

        assert runner.invoke(command, []).output.strip() == repr(timedelta(minutes=2))
        result = runner.invoke(command, ["--timeout", "forever"])
        assert result.exit_code == 2
        assert "not a valid duration" in result.output


@click.command(cls=TerminatedCommand)
@click.argument("args", nargs=-1)
@click.option("--flag", "-f", default="")
@click.pass_context
def echo_positionals(ctx, args, flag):
    click.echo("|".join(positional_args(ctx, args)))
    click.echo(f"flag={flag}")


class TestTerminatedCommand:
    """Test that '--' survives click parsing."""

    def test_terminator_and_following_tokens_kept(self):
        result = CliRunner().invoke(
            echo_positionals, ["app", "image", "--", "/start", "--flag=app-value", "-x"]
        )

        assert result.exit_code == 0
        assert result.output == "app|image|--|/start|--flag=app-value|-x\nflag=\n"

    def test_flags_before_terminator_are_parsed(self):
        result = CliRunner().invoke(
            echo_positionals, ["app", "-f", "mine", "image", "--", "/start"]
        )

        assert result.output == "app|image|--|/start\nflag=mine\n"

    def test_without_terminator(self):
        result = CliRunner().invoke(echo_positionals, ["app", "image", "extra", "/start"])

        assert result.output == "app|image|extra|/start\nflag=\n"

    def test_trailing_terminator(self):
        result = CliRunner().invoke(echo_positionals, ["app", "image", "--"])

        assert result.output == "app|image|--\nflag=\n"

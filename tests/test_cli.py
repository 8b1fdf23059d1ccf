"""Tests for the ltc command line surface."""

from datetime import timedelta
from types import SimpleNamespace

import pytest
from click.testing import CliRunner

import ltc.commands.create as create_module
import ltc.commands.scale as scale_module
from ltc.constants import ExitCode
from ltc.core.config_loader import TargetConfig, load_target_config
from ltc.main import cli, main


class RecordingCommand:
    """Stands in for a command class and records how it was built."""

    instances = []

    def __init__(self, options, ui, **kwargs):
        self.options = options
        self.kwargs = kwargs
        RecordingCommand.instances.append(self)

    def run(self):
        pass


@pytest.fixture
def targeted(monkeypatch):
    RecordingCommand.instances = []
    services = SimpleNamespace(receptor=object(), registry=object(), log_tailer=object())
    config = TargetConfig(target="192.168.11.11.xip.io")
    for module in (create_module, scale_module):
        monkeypatch.setattr(module, "load_target_config", lambda: config)
        monkeypatch.setattr(module, "connect", lambda config, ui: services)
    monkeypatch.setattr(create_module, "CreateAppCommand", RecordingCommand)
    monkeypatch.setattr(scale_module, "ScaleAppCommand", RecordingCommand)
    return services


class TestCreateCli:
    """Test flag parsing for ltc create."""

    def test_start_command_and_app_flags_pass_through(self, targeted):
        result = CliRunner().invoke(
            cli,
            [
                "create",
                "cool-web-app",
                "superfun/app",
                "--ports=8080,9000",
                "-e",
                "A=1",
                "--env",
                "B",
                "--timeout",
                "30s",
                "--",
                "/start-me-please",
                "--appFlavor=purple",
                "-x",
            ],
        )

        assert result.exit_code == 0, result.output
        command = RecordingCommand.instances[0]
        assert command.options.args == [
            "cool-web-app",
            "superfun/app",
            "--",
            "/start-me-please",
            "--appFlavor=purple",
            "-x",
        ]
        assert command.options.ports == "8080,9000"
        assert command.options.env == ["A=1", "B"]
        assert command.options.timeout == timedelta(seconds=30)
        assert command.kwargs["domain"] == "192.168.11.11.xip.io"
        assert command.kwargs["app_runner"] is targeted.receptor
        assert command.kwargs["metadata_fetcher"] is targeted.registry

    def test_defaults(self, targeted):
        result = CliRunner().invoke(cli, ["create", "cool-web-app", "superfun/app"])

        assert result.exit_code == 0, result.output
        options = RecordingCommand.instances[0].options
        assert options.args == ["cool-web-app", "superfun/app"]
        assert options.cpu_weight == 100
        assert options.memory_mb == 128
        assert options.disk_mb == 0
        assert options.instances == 1
        assert options.monitor_timeout == timedelta(seconds=1)
        assert options.timeout == timedelta(minutes=2)
        assert options.no_monitor is False
        assert options.no_routes is False

    def test_positional_without_terminator_is_kept(self, targeted):
        result = CliRunner().invoke(
            cli, ["create", "cool-web-app", "superfun/app", "not-the-terminator", "/start"]
        )

        assert result.exit_code == 0, result.output
        assert RecordingCommand.instances[0].options.args == [
            "cool-web-app",
            "superfun/app",
            "not-the-terminator",
            "/start",
        ]

    def test_bad_duration(self, targeted):
        result = CliRunner().invoke(
            cli, ["create", "cool-web-app", "superfun/app", "--timeout", "forever"]
        )

        assert result.exit_code == 2
        assert RecordingCommand.instances == []

    def test_cr_alias(self, targeted):
        result = CliRunner().invoke(cli, ["cr", "cool-web-app", "superfun/app"])

        assert result.exit_code == 0, result.output
        assert RecordingCommand.instances[0].options.args == ["cool-web-app", "superfun/app"]


class TestUntargetedCli:
    """Test that usage errors win over a missing target."""

    def test_create_missing_image(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LATTICE_CLI_HOME", str(tmp_path))

        result = CliRunner().invoke(cli, ["create", "only-a-name"])

        assert result.exit_code == ExitCode.INVALID_SYNTAX
        assert "APP_NAME and DOCKER_IMAGE are required" in result.output
        assert "not targeted" not in result.output

    def test_scale_missing_count(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LATTICE_CLI_HOME", str(tmp_path))

        result = CliRunner().invoke(cli, ["scale", "only-a-name"])

        assert result.exit_code == ExitCode.INVALID_SYNTAX
        assert "Please enter 'ltc scale APP_NAME NUMBER_OF_INSTANCES'" in result.output


class TestScaleCli:
    def test_args_and_timeout(self, targeted):
        result = CliRunner().invoke(cli, ["scale", "cool-web-app", "3", "-t", "10s"])

        assert result.exit_code == 0, result.output
        options = RecordingCommand.instances[0].options
        assert options.args == ["cool-web-app", "3"]
        assert options.timeout == timedelta(seconds=10)


class TestTargetCli:
    """Test ltc target against a temporary config directory."""

    def test_set_and_show_target(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LATTICE_CLI_HOME", str(tmp_path))
        runner = CliRunner()

        result = runner.invoke(cli, ["target", "lattice.example.com", "-u", "admin", "-P", "secret"])

        assert result.exit_code == 0, result.output
        assert "Api Location Set" in result.output
        config = load_target_config(tmp_path)
        assert config.target == "lattice.example.com"
        assert config.auth == ("admin", "secret")

        result = runner.invoke(cli, ["target"])

        assert "lattice.example.com" in result.output
        assert "admin" in result.output

    def test_show_unset_target(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LATTICE_CLI_HOME", str(tmp_path))

        result = CliRunner().invoke(cli, ["target"])

        assert result.exit_code == 0
        assert "Target not set" in result.output


class TestMain:
    def test_untargeted_create_exits_with_command_failed(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("LATTICE_CLI_HOME", str(tmp_path))
        monkeypatch.setattr("sys.argv", ["ltc", "create", "cool-web-app", "superfun/app"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == ExitCode.COMMAND_FAILED
        assert "ltc is not targeted" in capsys.readouterr().out

"""Tests for the scale command."""

from datetime import timedelta

import pytest
from conftest import FakeAppExaminer, FakeAppRunner

from ltc.commands.scale import ScaleAppCommand, ScaleOptions
from ltc.constants import ERROR_PLACEMENT, ExitCode
from ltc.exceptions import ConfigurationError


def make_command(
    ui,
    clock,
    logs_outputter,
    app_runner,
    examiner=None,
    args=("cool-web-app", "3"),
    logs_dir=None,
    require_target=None,
    **options,
):
    return ScaleAppCommand(
        ScaleOptions(args=list(args), **options),
        ui,
        app_runner=app_runner,
        app_examiner=examiner or FakeAppExaminer((3, False)),
        logs_outputter=logs_outputter,
        clock=clock,
        logs_dir=logs_dir,
        require_target=require_target,
    )


class TestScaleApp:
    """Test scaling a running app."""

    def test_scales_and_waits(self, ui, clock, logs_outputter, app_runner):
        examiner = FakeAppExaminer((1, False), (3, False))
        command = make_command(ui, clock, logs_outputter, app_runner, examiner=examiner)

        command.run()

        assert app_runner.scaled == [("cool-web-app", 3)]
        assert logs_outputter.started == ["cool-web-app"]
        assert logs_outputter.stop_count == 1
        assert ui.text == (
            "Scaling cool-web-app to 3 instances\n"
            ".\n"
            "App Scaled Successfully\n"
        )

    def test_scale_to_zero(self, ui, clock, logs_outputter, app_runner):
        examiner = FakeAppExaminer((0, False))
        command = make_command(
            ui, clock, logs_outputter, app_runner, examiner=examiner, args=("cool-web-app", "0")
        )

        command.run()

        assert app_runner.scaled == [("cool-web-app", 0)]
        assert "App Scaled Successfully" in ui.text

    @pytest.mark.parametrize("args", [(), ("cool-web-app",), ("", "3"), ("a", "3", "extra")])
    def test_usage(self, ui, clock, logs_outputter, app_runner, args):
        command = make_command(ui, clock, logs_outputter, app_runner, args=args)

        with pytest.raises(SystemExit) as exc_info:
            command.run()

        assert exc_info.value.code == ExitCode.INVALID_SYNTAX
        assert "Please enter 'ltc scale APP_NAME NUMBER_OF_INSTANCES'" in ui.text
        assert app_runner.scaled == []

    def test_instances_must_be_integer(self, ui, clock, logs_outputter, app_runner):
        command = make_command(
            ui, clock, logs_outputter, app_runner, args=("cool-web-app", "lots")
        )

        with pytest.raises(SystemExit) as exc_info:
            command.run()

        assert exc_info.value.code == ExitCode.INVALID_SYNTAX
        assert "Number of Instances must be an integer" in ui.text

    def test_scale_request_fails(self, ui, clock, logs_outputter):
        app_runner = FakeAppRunner(error=RuntimeError("cool-web-app is not started."))
        command = make_command(ui, clock, logs_outputter, app_runner)

        with pytest.raises(SystemExit) as exc_info:
            command.run()

        assert exc_info.value.code == ExitCode.COMMAND_FAILED
        assert (
            "Error Scaling App to 3 instances: cool-web-app is not started." in ui.text
        )
        assert logs_outputter.started == []

    def test_timeout(self, ui, clock, logs_outputter, app_runner):
        command = make_command(
            ui,
            clock,
            logs_outputter,
            app_runner,
            examiner=FakeAppExaminer((1, False)),
            timeout=timedelta(seconds=2),
        )

        command.run()

        assert "Timed out waiting for the container to scale." in ui.text
        assert "App Scaled Successfully" not in ui.text
        assert logs_outputter.stop_count == 1

    def test_timeout_is_logged_as_warning(self, ui, clock, logs_outputter, app_runner, tmp_path):
        command = make_command(
            ui,
            clock,
            logs_outputter,
            app_runner,
            examiner=FakeAppExaminer((1, False)),
            timeout=timedelta(seconds=2),
            logs_dir=tmp_path,
        )

        command.run()

        log_file = next((tmp_path / "cool-web-app").rglob("*_scale.log"))
        assert "[WARNING] Timed out after 0:00:02: 1/3 instances running" in log_file.read_text()

    def test_usage_errors_come_before_the_target_check(self, ui, clock, logs_outputter, app_runner):
        def untargeted():
            raise ConfigurationError.not_targeted()

        command = make_command(
            ui, clock, logs_outputter, app_runner, args=("cool-web-app",), require_target=untargeted
        )

        with pytest.raises(SystemExit) as exc_info:
            command.run()

        assert exc_info.value.code == ExitCode.INVALID_SYNTAX
        assert "not targeted" not in ui.text
        assert app_runner.scaled == []

    def test_placement_error(self, ui, clock, logs_outputter, app_runner):
        command = make_command(
            ui, clock, logs_outputter, app_runner, examiner=FakeAppExaminer((1, True))
        )

        with pytest.raises(SystemExit) as exc_info:
            command.run()

        assert exc_info.value.code == ExitCode.PLACEMENT_ERROR
        assert ui.text.count(ERROR_PLACEMENT) == 1
        assert logs_outputter.stop_count == 1

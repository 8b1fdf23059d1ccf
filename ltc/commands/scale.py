"""
Scale Command

Change the instance count of a running app and wait for it to settle.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Callable, Optional

import click

from ltc.base import BaseCommand
from ltc.constants import (
    DEFAULT_POLLING_TIMEOUT,
    ERROR_SCALE_INSTANCES,
    ERROR_SCALE_USAGE,
)
from ltc.core import Poller, SystemClock
from ltc.core.config_loader import load_target_config
from ltc.core.interfaces import UI, AppExaminer, AppRunner, Clock, TailedLogsOutputter
from ltc.exceptions import CommandFailedError, IncorrectUsageError, PlacementError
from ltc.models import PollingAction
from ltc.services import connect
from ltc.ui_components import TerminalUI
from ltc.utils import DURATION


@dataclass
class ScaleOptions:
    """Options for scale command."""

    args: list[str] = field(default_factory=list)
    timeout: timedelta = DEFAULT_POLLING_TIMEOUT


class ScaleAppCommand(BaseCommand):
    """
    Scale an app to a new instance count.

    Features:
    - Argument validation
    - Log tailing while polling
    - Scale-specific timeout guidance
    """

    def __init__(
        self,
        options: ScaleOptions,
        ui: UI,
        app_runner: AppRunner,
        app_examiner: AppExaminer,
        logs_outputter: TailedLogsOutputter,
        clock: Optional[Clock] = None,
        verbose: bool = False,
        logs_dir: Optional[Path] = None,
        require_target: Optional[Callable[[], None]] = None,
    ):
        super().__init__(
            ui, verbose=verbose, logs_dir=logs_dir, require_target=require_target
        )
        self.options = options
        self.app_runner = app_runner
        self.app_examiner = app_examiner
        self.logs_outputter = logs_outputter
        self.poller = Poller(clock or SystemClock(), ui)

    def execute(self) -> None:
        """Execute scale command."""
        name, instances = self._validate_args()
        self.check_target()

        self.show_header(title="Scale App", app=name, details={"Instances": str(instances)})
        logger = self.init_logger(name, "scale")

        if logger:
            logger.step("Scaling App")
        try:
            self.app_runner.scale_app(name, instances)
        except Exception as e:
            raise CommandFailedError(f"Error Scaling App to {instances} instances: {e}")

        self.ui.say(f"Scaling {name} to {instances} instances\n")

        if logger:
            logger.step("Waiting For Instances")

        self.logs_outputter.output_tailed_logs(name)
        try:
            result = self.poller.poll_until_all_instances_running(
                self.app_examiner,
                self.options.timeout,
                name,
                instances,
                PollingAction.SCALE,
            )
        finally:
            self.logs_outputter.stop_outputting()

        self.log(f"Poll result: {result!r}")
        if result.is_placement_failure:
            raise PlacementError(name)

        if result.is_success:
            self.ui.say_line("App Scaled Successfully", style="green")
            if logger:
                logger.success(f"{name} scaled to {instances}")
        elif logger:
            logger.warning(
                f"Timed out after {self.options.timeout}: "
                f"{result.running_instances}/{instances} instances running"
            )

    def _validate_args(self) -> tuple[str, int]:
        args = self.options.args
        if len(args) != 2 or args[0] == "":
            raise IncorrectUsageError(ERROR_SCALE_USAGE)

        try:
            instances = int(args[1])
        except ValueError:
            raise IncorrectUsageError(ERROR_SCALE_INSTANCES)

        return args[0], instances


@click.command("scale")
@click.argument("args", nargs=-1)
@click.option("--timeout", "-t", type=DURATION, default="2m", show_default=True, help="Polling timeout for app to scale")
@click.pass_context
def scale(ctx, args, timeout):
    """
    Scales a docker app on lattice

    \b
    ltc scale APP_NAME NUMBER_OF_INSTANCES

    \b
    Examples:
        ltc scale lattice-app 5
        ltc scale lattice-app 0 --timeout 30s
    """
    verbose = ctx.obj.get("verbose", False) if ctx.obj else False
    ui = TerminalUI()
    config = load_target_config()
    services = connect(config, ui)

    cmd = ScaleAppCommand(
        ScaleOptions(args=list(args), timeout=timeout),
        ui,
        app_runner=services.receptor,
        app_examiner=services.receptor,
        logs_outputter=services.log_tailer,
        verbose=verbose,
        logs_dir=config.logs_path,
        require_target=config.require_target,
    )
    cmd.run()

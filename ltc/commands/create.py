"""
Create Command

Create a docker app on the cluster and wait for its instances to run.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Callable, Optional, Sequence

import click

from ltc.base import BaseCommand
from ltc.constants import (
    DEFAULT_CPU_WEIGHT,
    DEFAULT_DISK_MB,
    DEFAULT_INSTANCES,
    DEFAULT_MEMORY_MB,
    DEFAULT_MONITOR_TIMEOUT,
    DEFAULT_POLLING_TIMEOUT,
    DEFAULT_WORKING_DIR,
    ERROR_APP_AND_IMAGE_REQUIRED,
    ERROR_INVALID_CPU_WEIGHT,
    ERROR_NO_START_COMMAND,
    ERROR_TERMINATOR_REQUIRED,
    MAX_CPU_WEIGHT,
    MIN_CPU_WEIGHT,
    START_COMMAND_TERMINATOR,
)
from ltc.core import (
    Poller,
    SystemClock,
    build_environment,
    get_exposed_ports,
    get_monitor_config,
    parse_route_overrides,
)
from ltc.core.config_loader import load_target_config
from ltc.core.interfaces import (
    UI,
    AppExaminer,
    AppRunner,
    Clock,
    ImageMetadataFetcher,
    TailedLogsOutputter,
)
from ltc.exceptions import (
    AppCreationError,
    BadDockerError,
    IncorrectUsageError,
    PlacementError,
)
from ltc.models import CreateAppParams, PollingAction, RouteOverride
from ltc.services import connect
from ltc.ui_components import TerminalUI
from ltc.utils import DURATION, TerminatedCommand, positional_args


@dataclass
class CreateOptions:
    """Options for create command."""

    args: list[str] = field(default_factory=list)
    working_dir: str = ""
    run_as_root: bool = False
    env: list[str] = field(default_factory=list)
    cpu_weight: int = DEFAULT_CPU_WEIGHT
    memory_mb: int = DEFAULT_MEMORY_MB
    disk_mb: int = DEFAULT_DISK_MB
    ports: str = ""
    monitor_port: int = 0
    monitor_url: str = ""
    monitor_timeout: timedelta = DEFAULT_MONITOR_TIMEOUT
    routes: str = ""
    instances: int = DEFAULT_INSTANCES
    no_monitor: bool = False
    no_routes: bool = False
    timeout: timedelta = DEFAULT_POLLING_TIMEOUT


class CreateAppCommand(BaseCommand):
    """
    Create a docker app.

    Features:
    - Ordered argument validation (first failing check wins)
    - Ports, monitor, working dir and start command from flags or image metadata
    - Route overrides and environment assembly
    - Log tailing while polling, stopped on every exit path
    """

    def __init__(
        self,
        options: CreateOptions,
        ui: UI,
        metadata_fetcher: ImageMetadataFetcher,
        app_runner: AppRunner,
        app_examiner: AppExaminer,
        logs_outputter: TailedLogsOutputter,
        domain: str,
        clock: Optional[Clock] = None,
        ambient_env: Optional[Sequence[str]] = None,
        verbose: bool = False,
        logs_dir: Optional[Path] = None,
        require_target: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize create command.

        Args:
            options: CreateOptions with parsed flags and positionals
            ui: User-facing notifier
            metadata_fetcher: Docker image metadata source
            app_runner: Submits the app to the cluster
            app_examiner: Reports running instances
            logs_outputter: Background log tailer
            domain: Cluster domain used for app URLs
            clock: Time source for polling (system clock if None)
            ambient_env: NAME=VALUE strings for bare --env names (os.environ if None)
            verbose: Whether to show verbose output
            logs_dir: Directory for command log files (no log file if None)
            require_target: Raises when no cluster is targeted (checked after validation)
        """
        super().__init__(
            ui, verbose=verbose, logs_dir=logs_dir, require_target=require_target
        )
        self.options = options
        self.metadata_fetcher = metadata_fetcher
        self.app_runner = app_runner
        self.app_examiner = app_examiner
        self.logs_outputter = logs_outputter
        self.domain = domain
        self.poller = Poller(clock or SystemClock(), ui)
        self.ambient_env = ambient_env

    def execute(self) -> None:
        """Execute create command."""
        app_args = self._validate_args()
        self.check_target()
        name, docker_image = self.options.args[0], self.options.args[1]
        start_command = self._arg(3)

        self.show_header(
            title="Create App",
            app=name,
            details={"Image": docker_image, "Instances": str(self.options.instances)},
        )
        logger = self.init_logger(name, "create")

        if logger:
            logger.step("Fetching Image Metadata")
        try:
            image_metadata = self.metadata_fetcher.fetch_metadata(docker_image)
        except Exception as e:
            raise BadDockerError(f"Error fetching image metadata: {e}")

        if logger:
            logger.step("Resolving Configuration")

        exposed_ports = get_exposed_ports(self.options.ports, image_metadata, self.ui)
        self.log(f"Exposed ports: {', '.join(str(port) for port in exposed_ports)}")

        monitor_config = get_monitor_config(
            exposed_ports,
            self.options.monitor_port,
            self.options.no_monitor,
            self.options.monitor_url,
            self.options.monitor_timeout,
        )
        self.log(f"Monitor: {monitor_config}")

        working_dir = self.options.working_dir
        if working_dir == "":
            self.ui.say(
                "No working directory specified, using working directory from the image metadata...\n"
            )
            if image_metadata.working_dir != "":
                working_dir = image_metadata.working_dir
                self.ui.say("Working directory is:\n")
                self.ui.say(working_dir + "\n")
            else:
                working_dir = DEFAULT_WORKING_DIR

        if monitor_config.is_enabled:
            self.ui.say(f"Monitoring the app on port {monitor_config.port}...\n")
        else:
            self.ui.say("No ports will be monitored.\n")

        if start_command == "":
            if not image_metadata.has_start_command:
                raise BadDockerError(ERROR_NO_START_COMMAND)

            self.ui.say("No start command specified, using start command from the image metadata...\n")
            start_command = image_metadata.start_command[0]

            self.ui.say("Start command is:\n")
            self.ui.say(" ".join(image_metadata.start_command) + "\n")

            app_args = image_metadata.start_command[1:]

        route_overrides = parse_route_overrides(self.options.routes)

        params = CreateAppParams(
            name=name,
            root_fs=docker_image,
            start_command=start_command,
            app_args=tuple(app_args),
            environment_variables=build_environment(
                self.options.env, name, self.ambient_env
            ),
            privileged=self.options.run_as_root,
            monitor=monitor_config,
            instances=self.options.instances,
            cpu_weight=self.options.cpu_weight,
            memory_mb=self.options.memory_mb,
            disk_mb=self.options.disk_mb,
            exposed_ports=exposed_ports,
            working_dir=working_dir,
            route_overrides=tuple(route_overrides),
            no_routes=self.options.no_routes,
            timeout=self.options.timeout,
        )

        if logger:
            logger.step("Creating App")
            logger.log(repr(params))

        try:
            self.app_runner.create_docker_app(params)
        except Exception as e:
            raise AppCreationError(name, e)

        self.ui.say(f"Creating App: {name}\n")

        if logger:
            logger.step("Waiting For Instances")

        self.logs_outputter.output_tailed_logs(name)
        try:
            result = self.poller.poll_until_all_instances_running(
                self.app_examiner,
                self.options.timeout,
                name,
                self.options.instances,
                PollingAction.START,
            )
        finally:
            self.logs_outputter.stop_outputting()

        self.log(f"Poll result: {result!r}")
        if result.is_placement_failure:
            raise PlacementError(name)

        if not result.is_success and logger:
            logger.warning(
                f"Timed out after {self.options.timeout}: "
                f"{result.running_instances}/{self.options.instances} instances running"
            )

        self._report_routes(name, route_overrides, result.is_success)

        if logger:
            logger.success(f"{name} created")

    def _arg(self, index: int) -> str:
        if len(self.options.args) > index:
            return self.options.args[index]
        return ""

    def _validate_args(self) -> list[str]:
        """
        Validate positionals and CPU weight.

        Checks run in a fixed order and only the first applicable one fires,
        so more than four positionals skip the CPU weight check.

        Returns:
            App arguments following the start command
        """
        args = self.options.args
        terminator = self._arg(2)
        start_command = self._arg(3)
        cpu_weight = self.options.cpu_weight

        if len(args) < 2:
            raise IncorrectUsageError(ERROR_APP_AND_IMAGE_REQUIRED)
        elif start_command != "" and terminator != START_COMMAND_TERMINATOR:
            raise IncorrectUsageError(ERROR_TERMINATOR_REQUIRED)
        elif len(args) > 4:
            return list(args[4:])
        elif cpu_weight < MIN_CPU_WEIGHT or cpu_weight > MAX_CPU_WEIGHT:
            raise IncorrectUsageError(ERROR_INVALID_CPU_WEIGHT)

        return []

    def _report_routes(
        self, name: str, route_overrides: list[RouteOverride], ok: bool
    ) -> None:
        if self.options.no_routes:
            self.ui.say(f"{name} is now running.\n", style="green")
            return
        elif ok:
            self.ui.say(f"{name} is now running.\n", style="green")
            self.ui.say("App is reachable at:\n")
        else:
            self.ui.say("App will be reachable at:\n")

        if route_overrides:
            for route in route_overrides:
                self.ui.say(self.url_for_app(route.hostname_prefix), style="green")
        else:
            self.ui.say(self.url_for_app(name), style="green")

    def url_for_app(self, hostname_prefix: str) -> str:
        return f"http://{hostname_prefix}.{self.domain}\n"


@click.command("create", cls=TerminatedCommand)
@click.argument("args", nargs=-1)
@click.option("--working-dir", "-w", default="", help="Working directory for container (overrides Docker metadata)")
@click.option("--run-as-root", "-r", is_flag=True, help="Runs in the context of the root user")
@click.option("--env", "-e", multiple=True, help="Environment variables (can be passed multiple times)")
@click.option("--cpu-weight", "-c", type=int, default=DEFAULT_CPU_WEIGHT, show_default=True, help="Relative CPU weight for the container (valid values: 1-100)")
@click.option("--memory-mb", "-m", type=int, default=DEFAULT_MEMORY_MB, show_default=True, help="Memory limit for container in MB")
@click.option("--disk-mb", "-d", type=int, default=DEFAULT_DISK_MB, show_default=True, help="Disk limit for container in MB")
@click.option("--ports", "-p", default="", help="Ports to expose on the container (comma delimited)")
@click.option("--monitor-port", "-M", type=int, default=0, help="Selects the port used to healthcheck the app")
@click.option("--monitor-url", "-U", default="", help="Uses HTTP to healthcheck the app (format is: port:/path/to/endpoint)")
@click.option("--monitor-timeout", type=DURATION, default="1s", show_default=True, help="Timeout for the app healthcheck")
@click.option("--routes", "-R", default="", help="Route mappings to exposed ports, e.g. --routes=80:web,8080:api")
@click.option("--instances", "-i", type=int, default=DEFAULT_INSTANCES, show_default=True, help="Number of application instances to spawn on launch")
@click.option("--no-monitor", is_flag=True, help="Disables healthchecking for the app")
@click.option("--no-routes", is_flag=True, help="Registers no routes for the app")
@click.option("--timeout", "-t", type=DURATION, default="2m", show_default=True, help="Polling timeout for app to start")
@click.pass_context
def create(ctx, args, working_dir, run_as_root, env, cpu_weight, memory_mb, disk_mb, ports, monitor_port, monitor_url, monitor_timeout, routes, instances, no_monitor, no_routes, timeout):
    """
    Creates a docker app on lattice

    \b
    ltc create APP_NAME DOCKER_IMAGE

    APP_NAME is required and must be unique across the Lattice cluster.
    DOCKER_IMAGE is required and must match the standard docker image format
    (e.g. "cloudfoundry/lattice-app", or "redis" which resolves to library/redis).

    ltc fetches the start command, working directory and exposed ports
    associated with your Docker image. The working directory defaults to "/".

    \b
    Examples:
        # Custom start command
        ltc create APP_NAME DOCKER_IMAGE -- START_COMMAND APP_ARG1 APP_ARG2

        # Custom working directory
        ltc create APP_NAME DOCKER_IMAGE --working-dir=/foo/app-folder

        # Environment variables
        ltc create APP_NAME DOCKER_IMAGE -e FOO=BAR -e BAZ=WIBBLE
    """
    verbose = ctx.obj.get("verbose", False) if ctx.obj else False
    ui = TerminalUI()
    config = load_target_config()
    services = connect(config, ui)

    options = CreateOptions(
        args=positional_args(ctx, args),
        working_dir=working_dir,
        run_as_root=run_as_root,
        env=list(env),
        cpu_weight=cpu_weight,
        memory_mb=memory_mb,
        disk_mb=disk_mb,
        ports=ports,
        monitor_port=monitor_port,
        monitor_url=monitor_url,
        monitor_timeout=monitor_timeout,
        routes=routes,
        instances=instances,
        no_monitor=no_monitor,
        no_routes=no_routes,
        timeout=timeout,
    )
    cmd = CreateAppCommand(
        options,
        ui,
        metadata_fetcher=services.registry,
        app_runner=services.receptor,
        app_examiner=services.receptor,
        logs_outputter=services.log_tailer,
        domain=config.target,
        verbose=verbose,
        logs_dir=config.logs_path,
        require_target=config.require_target,
    )
    cmd.run()

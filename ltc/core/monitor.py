"""Health-check (monitor) resolution"""

from datetime import timedelta
from typing import Optional, Sequence

from ltc.exceptions import InvalidPortError, MonitorPortNotExposedError
from ltc.models import MonitorConfig, MonitorMethod


def get_monitor_config(
    exposed_ports: Sequence[int],
    monitor_port: int,
    no_monitor: bool,
    monitor_url: str,
    monitor_timeout: timedelta,
) -> MonitorConfig:
    """
    Determine how the app is health-checked.

    The first matching rule wins:
    1. --no-monitor disables monitoring, other monitor flags are ignored
    2. --monitor-url PORT:URI monitors over HTTP
    3. --monitor-port, or the lowest exposed port, monitors port reachability

    Args:
        exposed_ports: Resolved exposed ports
        monitor_port: --monitor-port (0 means unset)
        no_monitor: --no-monitor
        monitor_url: --monitor-url ("" means unset)
        monitor_timeout: --monitor-timeout

    Returns:
        MonitorConfig

    Raises:
        InvalidPortError: If the monitor URL is malformed
        MonitorPortNotExposedError: If the monitored port is not exposed
    """
    if no_monitor:
        return MonitorConfig.none()

    if monitor_url != "":
        url_parts = monitor_url.split(":")
        if len(url_parts) != 2:
            raise InvalidPortError(monitor_url)

        url_port = _parse_port_number(url_parts[0])
        if url_port is None:
            raise InvalidPortError(monitor_url)

        check_port_exposed(exposed_ports, url_port)

        return MonitorConfig(
            method=MonitorMethod.URL,
            port=url_port,
            uri=url_parts[1],
            timeout=monitor_timeout,
        )

    if not exposed_ports:
        raise InvalidPortError()

    port = sorted(exposed_ports)[0]
    if monitor_port > 0:
        port = monitor_port

    check_port_exposed(exposed_ports, port)

    return MonitorConfig(
        method=MonitorMethod.PORT,
        port=port,
        timeout=monitor_timeout,
    )


def check_port_exposed(exposed_ports: Sequence[int], port: int) -> None:
    """Raise MonitorPortNotExposedError unless port is exposed."""
    if port not in exposed_ports:
        raise MonitorPortNotExposedError(port, tuple(exposed_ports))


def _parse_port_number(value: str) -> Optional[int]:
    """Parse a plain base-10 integer with an optional sign; None otherwise."""
    digits = value[1:] if value[:1] in ("+", "-") else value
    if not digits.isdecimal():
        return None
    return int(value)

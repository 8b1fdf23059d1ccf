"""Exposed port resolution"""

from ltc.constants import DEFAULT_EXPOSED_PORT, MAX_PORT
from ltc.core.interfaces import UI
from ltc.exceptions import InvalidPortError
from ltc.models import ImageMetadata


def get_exposed_ports(
    ports_flag: str, image_metadata: ImageMetadata, ui: UI
) -> tuple[int, ...]:
    """
    Determine which container ports to expose.

    Precedence:
    1. --ports, sorted as strings before conversion ("10" sorts before "9")
    2. Ports exposed by the image metadata, verbatim
    3. 8080

    Args:
        ports_flag: Raw --ports flag value (comma delimited)
        image_metadata: Metadata of the docker image
        ui: Notifier for the metadata/default notices

    Returns:
        Non-empty tuple of ports

    Raises:
        InvalidPortError: If a port is not an integer between 0-65535
    """
    if ports_flag != "":
        return tuple(_convert_port(port) for port in sorted(ports_flag.split(",")))

    if image_metadata.exposed_ports:
        exposed_ports = ", ".join(str(port) for port in image_metadata.exposed_ports)
        ui.say(
            "No port specified, using exposed ports from the image metadata.\n"
            f"\tExposed Ports: {exposed_ports}\n"
        )
        return tuple(image_metadata.exposed_ports)

    ui.say(
        "No port specified, image metadata did not contain exposed ports. "
        f"Defaulting to {DEFAULT_EXPOSED_PORT}.\n"
    )
    return (DEFAULT_EXPOSED_PORT,)


def _convert_port(value: str) -> int:
    if not value.isdecimal() or int(value) > MAX_PORT:
        raise InvalidPortError(value)

    return int(value)

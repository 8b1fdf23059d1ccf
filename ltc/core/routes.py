"""Route override parsing for --routes"""

from ltc.constants import MAX_PORT
from ltc.exceptions import MalformedRouteError
from ltc.models import RouteOverride


def parse_route_overrides(routes: str) -> list[RouteOverride]:
    """
    Parse a comma-separated list of PORT:PREFIX clauses.

    Parsing stops at the first malformed clause. Empty clauses are skipped,
    so an empty string means "route the default app name only".

    Args:
        routes: Raw --routes flag value (e.g. "80:web,8080:api")

    Returns:
        Route overrides in clause order

    Raises:
        MalformedRouteError: If a clause is not PORT:PREFIX
    """
    route_overrides: list[RouteOverride] = []

    for route in routes.split(","):
        if route == "":
            continue

        route_parts = route.split(":")
        if len(route_parts) < 2 or not _is_port(route_parts[0]):
            raise MalformedRouteError(route)

        route_overrides.append(
            RouteOverride(hostname_prefix=route_parts[1], port=int(route_parts[0]))
        )

    return route_overrides


def _is_port(value: str) -> bool:
    return value.isdecimal() and int(value) <= MAX_PORT

"""
Receptor Service

HTTP client for the cluster scheduler API (desired and actual app state).
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ltc.constants import RECEPTOR_TIMEOUT
from ltc.exceptions import ClusterApiError
from ltc.models import CreateAppParams

log = logging.getLogger(__name__)

RUNNING_STATE = "RUNNING"


class ReceptorService:
    """
    Client for the receptor API.

    Responsibilities:
    - Submit desired apps (create, scale)
    - Report running instance counts and placement errors
    - Fetch recent app log lines for tailing
    """

    def __init__(
        self,
        base_url: str,
        auth: Optional[tuple[str, str]] = None,
        session: Optional[requests.Session] = None,
        timeout: float = RECEPTOR_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if auth:
            self.session.auth = auth

    def create_docker_app(self, params: CreateAppParams) -> None:
        """
        Submit a new docker app.

        Raises:
            ClusterApiError: If the app already exists or the request fails
        """
        if self.app_exists(params.name):
            raise ClusterApiError(f"{params.name} is already running")

        log.debug("Creating desired app %r", params)
        self._request("POST", "/v1/desired_lrps", json=params.to_dict())

    def scale_app(self, name: str, instances: int) -> None:
        """
        Change the desired instance count of an existing app.

        Raises:
            ClusterApiError: If the app does not exist or the request fails
        """
        if not self.app_exists(name):
            raise ClusterApiError(f"{name} is not started.")

        log.debug("Scaling %s to %d instances", name, instances)
        self._request("PUT", f"/v1/desired_lrps/{name}", json={"instances": instances})

    def app_exists(self, name: str) -> bool:
        response = self._request("GET", f"/v1/desired_lrps/{name}", allow_not_found=True)
        return response is not None

    def running_app_instances_info(self, name: str) -> tuple[int, bool]:
        """
        Count running instances of an app.

        Returns:
            Tuple of (running instance count, placement error occurred)
        """
        instances = self.actual_instances(name)
        running = sum(1 for instance in instances if instance.get("state") == RUNNING_STATE)
        placement_error = any(instance.get("placement_error") for instance in instances)
        return running, placement_error

    def actual_instances(self, name: str) -> List[Dict[str, Any]]:
        response = self._request("GET", f"/v1/actual_lrps/{name}", allow_not_found=True)
        if response is None:
            return []
        return response.json() or []

    def fetch_logs(self, name: str, since_ns: int = 0) -> List[Dict[str, Any]]:
        """
        Fetch app log lines newer than since_ns.

        Returns:
            List of {"timestamp", "source", "message"} entries, oldest first
        """
        response = self._request(
            "GET", f"/v1/apps/{name}/logs", params={"since": since_ns}
        )
        return response.json() or []

    def _request(
        self, method: str, path: str, allow_not_found: bool = False, **kwargs
    ) -> Optional[requests.Response]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ClusterApiError(f"Cannot reach receptor at {self.base_url}: {e}")

        if allow_not_found and response.status_code == 404:
            return None

        if response.status_code >= 400:
            raise ClusterApiError(
                _error_message(response) or f"{method} {path} failed",
                status_code=response.status_code,
            )

        return response


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or "")
    return ""

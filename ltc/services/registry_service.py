"""
Registry Service

Reads docker image metadata (working dir, start command, exposed ports)
through the Docker Registry HTTP API v2.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ltc.constants import (
    DEFAULT_DOCKER_REGISTRY,
    DEFAULT_IMAGE_TAG,
    REGISTRY_TIMEOUT,
)
from ltc.exceptions import RegistryError
from ltc.models import ImageMetadata

log = logging.getLogger(__name__)

MANIFEST_V2 = "application/vnd.docker.distribution.manifest.v2+json"
MANIFEST_LIST_V2 = "application/vnd.docker.distribution.manifest.list.v2+json"
OCI_MANIFEST = "application/vnd.oci.image.manifest.v1+json"
OCI_INDEX = "application/vnd.oci.image.index.v1+json"
MANIFEST_ACCEPT = ", ".join([MANIFEST_V2, MANIFEST_LIST_V2, OCI_MANIFEST, OCI_INDEX])

_AUTH_PARAM = re.compile(r'(\w+)="([^"]*)"')


@dataclass
class ImageReference:
    """A parsed docker image reference."""

    registry: str
    repository: str
    reference: str

    @classmethod
    def parse(cls, image: str) -> "ImageReference":
        """
        Parse references like "redis", "cloudfoundry/lattice-app:v1",
        "quay.io/org/app" or "app@sha256:...".

        Official Docker Hub images resolve to library/<name>.
        """
        if not image or image.strip() != image:
            raise RegistryError(f"Invalid image reference: {image!r}")

        name = image
        registry = DEFAULT_DOCKER_REGISTRY
        first, _, rest = image.partition("/")
        if rest and ("." in first or ":" in first or first == "localhost"):
            registry = first
            name = rest

        if "@" in name:
            name, reference = name.split("@", 1)
        else:
            last_slash = name.rfind("/")
            colon = name.rfind(":")
            if colon > last_slash:
                name, reference = name[:colon], name[colon + 1 :]
            else:
                reference = DEFAULT_IMAGE_TAG

        if registry == DEFAULT_DOCKER_REGISTRY and "/" not in name:
            name = f"library/{name}"

        return cls(registry=registry, repository=name, reference=reference)

    @property
    def base_url(self) -> str:
        return f"https://{self.registry}/v2/{self.repository}"


class RegistryService:
    """
    Docker registry client.

    Features:
    - Anonymous bearer-token auth (Docker Hub and compatible registries)
    - Multi-arch manifest lists (picks linux/amd64)
    - Docker v2 and OCI manifests
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = REGISTRY_TIMEOUT,
        platform: tuple[str, str] = ("linux", "amd64"),
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.platform = platform
        self._tokens: Dict[str, str] = {}

    def fetch_metadata(self, image: str) -> ImageMetadata:
        """
        Fetch metadata for an image.

        Raises:
            RegistryError: If the image or its config cannot be read
        """
        ref = ImageReference.parse(image)
        log.debug("Fetching metadata for %s", ref)

        manifest = self._get_json(ref, f"/manifests/{ref.reference}", MANIFEST_ACCEPT)
        if manifest.get("mediaType") in (MANIFEST_LIST_V2, OCI_INDEX) or "manifests" in manifest:
            digest = self._select_platform(manifest)
            manifest = self._get_json(ref, f"/manifests/{digest}", MANIFEST_ACCEPT)

        config_digest = manifest.get("config", {}).get("digest")
        if not config_digest:
            raise RegistryError(f"Image {image} has no config blob")

        blob = self._get_json(ref, f"/blobs/{config_digest}")
        return metadata_from_config(blob.get("config") or {})

    def _select_platform(self, manifest_list: Dict[str, Any]) -> str:
        os_name, architecture = self.platform
        for entry in manifest_list.get("manifests", []):
            platform = entry.get("platform", {})
            if platform.get("os") == os_name and platform.get("architecture") == architecture:
                return entry["digest"]
        raise RegistryError(f"No {os_name}/{architecture} image in manifest list")

    def _get_json(
        self, ref: ImageReference, path: str, accept: Optional[str] = None
    ) -> Dict[str, Any]:
        url = f"{ref.base_url}{path}"
        response = self._get(ref, url, accept)

        if response.status_code == 401:
            self._authenticate(ref, response.headers.get("WWW-Authenticate", ""))
            response = self._get(ref, url, accept)

        if response.status_code == 404:
            raise RegistryError(f"Image not found: {ref.repository}:{ref.reference}")
        if response.status_code >= 400:
            raise RegistryError(
                f"Registry request failed: {url}", context=f"HTTP {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise RegistryError(f"Invalid registry response from {url}", context=str(e))

    def _get(self, ref: ImageReference, url: str, accept: Optional[str]) -> requests.Response:
        headers = {}
        if accept:
            headers["Accept"] = accept
        token = self._tokens.get(ref.repository)
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            return self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise RegistryError(f"Cannot reach registry {ref.registry}: {e}")

    def _authenticate(self, ref: ImageReference, challenge: str) -> None:
        scheme, _, params_str = challenge.partition(" ")
        if scheme.lower() != "bearer":
            raise RegistryError(f"Unsupported registry auth for {ref.registry}")

        params = dict(_AUTH_PARAM.findall(params_str))
        realm = params.pop("realm", None)
        if not realm:
            raise RegistryError(f"Registry {ref.registry} sent no auth realm")
        params.setdefault("scope", f"repository:{ref.repository}:pull")

        try:
            response = self.session.get(realm, params=params, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            raise RegistryError(f"Registry authentication failed: {e}")

        token = body.get("token") or body.get("access_token")
        if not token:
            raise RegistryError("Registry authentication returned no token")
        self._tokens[ref.repository] = token


def metadata_from_config(config: Dict[str, Any]) -> ImageMetadata:
    """Build ImageMetadata from the "config" section of an image config blob."""
    start_command = list(config.get("Entrypoint") or []) + list(config.get("Cmd") or [])

    exposed_ports = []
    for spec in (config.get("ExposedPorts") or {}).keys():
        port, _, _protocol = spec.partition("/")
        if port.isdecimal():
            exposed_ports.append(int(port))

    return ImageMetadata(
        working_dir=config.get("WorkingDir") or "",
        start_command=start_command,
        exposed_ports=sorted(exposed_ports),
    )

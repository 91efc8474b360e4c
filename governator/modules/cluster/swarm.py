import asyncio
import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


@dataclass
class ServiceState:
    """A service spec together with the version it was read at."""

    id: str
    name: str
    version: int
    spec: Dict[str, Any]

    @property
    def image(self) -> str:
        return self.spec.get("TaskTemplate", {}).get("ContainerSpec", {}).get("Image", "")


def parse_docker_host(host: str) -> Tuple[str, str, str]:
    """
    Split a docker host URI into protocol, address and base path.

    Args:
        host: URI such as ``unix:///var/run/docker.sock`` or ``tcp://10.0.0.1:2376/api``

    Returns:
        (proto, addr, base_path); base_path is only set for tcp hosts

    Raises:
        ValueError: If the URI has no protocol
    """
    proto_addr = host.split("://", 1)
    if len(proto_addr) == 1:
        raise ValueError(f"unable to parse docker host `{host}`")

    proto, addr = proto_addr
    base_path = ""
    if proto == "tcp":
        parsed = urlsplit(f"tcp://{addr}")
        addr = parsed.netloc
        base_path = parsed.path

    return proto, addr, base_path


class SwarmCluster:
    def __init__(self, docker_client):
        """
        Initialize swarm cluster access.

        Args:
            docker_client: docker.DockerClient, borrowed and never closed here
        """
        self.docker = docker_client

    async def inspect_service(self, name: str) -> ServiceState:
        """
        Read a service's spec and version in one call.

        Raises:
            docker.errors.NotFound: If no service has that name
            docker.errors.APIError: On any other Engine API failure
        """
        attrs = await asyncio.to_thread(self.docker.api.inspect_service, name)
        return ServiceState(
            id=attrs["ID"],
            name=name,
            version=attrs["Version"]["Index"],
            spec=attrs["Spec"],
        )

    async def update_image(self, service: ServiceState, image: str) -> None:
        """
        Set the service's container image, guarded by its version.

        The Engine API rejects the update if the service changed since
        it was inspected.

        Args:
            service: State returned by inspect_service()
            image: Full image reference to run

        Raises:
            docker.errors.APIError: If the update is rejected
        """
        spec = copy.deepcopy(service.spec)
        task_template = spec.setdefault("TaskTemplate", {})
        task_template.setdefault("ContainerSpec", {})["Image"] = image

        options = {
            "task_template": task_template,
            "name": spec.get("Name", service.name),
            "labels": spec.get("Labels"),
            "mode": spec.get("Mode"),
            "update_config": spec.get("UpdateConfig"),
            "networks": spec.get("Networks"),
            "endpoint_spec": spec.get("EndpointSpec"),
        }
        if spec.get("RollbackConfig") is not None:
            options["rollback_config"] = spec["RollbackConfig"]

        logger.debug(
            f"Updating service {service.name} at version {service.version} "
            f"from {service.image} to {image}"
        )
        await asyncio.to_thread(
            self.docker.api.update_service,
            service.id,
            service.version,
            **options,
        )

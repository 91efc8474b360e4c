"""
Governator shared data models.

These models define the structure of the data read from the deploy
queue and passed between the deployer's modules.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidImageReferenceError


class CycleOutcome(str, Enum):
    """How a single deploy cycle finished without error."""

    IDLE = "idle"
    LOST_CLAIM = "lost_claim"
    CANCELLED = "cancelled"
    DEPLOYED = "deployed"


class RequestMetadata(BaseModel):
    """The request:metadata payload stored alongside each queued deploy."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    docker_url: str = Field(..., alias="dockerUrl", description="Image to deploy")
    etcd_dir: Optional[str] = Field(
        None, alias="etcdDir", description="Legacy etcd directory of the service"
    )


@dataclass(frozen=True)
class ImageReference:
    """A parsed [registry/]owner/repo:tag docker url."""

    owner: str
    repo: str
    tag: str
    url: str


def parse_image_reference(docker_url: str) -> ImageReference:
    """
    Parse a docker url into owner, repo and tag.

    Args:
        docker_url: Image reference such as ``octoblu/my-app:v1`` or
            ``quay.io/octoblu/my-app:v1``

    Returns:
        ImageReference with the registry host dropped

    Raises:
        InvalidImageReferenceError: If the url is not exactly one
            ``path:tag`` pair with a 2 or 3 segment path
    """
    url_parts = docker_url.split(":")
    if len(url_parts) != 2:
        raise InvalidImageReferenceError(docker_url)

    path, tag = url_parts
    project_parts = path.split("/")

    if len(project_parts) == 2:
        owner, repo = project_parts
    elif len(project_parts) == 3:
        _, owner, repo = project_parts
    else:
        raise InvalidImageReferenceError(docker_url)

    if not (owner and repo and tag):
        raise InvalidImageReferenceError(docker_url)

    return ImageReference(owner=owner, repo=repo, tag=tag, url=docker_url)

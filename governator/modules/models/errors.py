"""Error types raised by a deploy cycle."""

from typing import Optional


class GovernatorError(Exception):
    """Base class for deploy cycle failures."""


class MetadataNotFoundError(GovernatorError, LookupError):
    """A claimed deploy has no request:metadata field."""

    def __init__(self, deploy: str):
        self.deploy = deploy
        super().__init__(f"Deploy metadata not found for '{deploy}'")


class InvalidImageReferenceError(GovernatorError, ValueError):
    """A docker url is not shaped like [registry/]owner/repo:tag."""

    def __init__(self, docker_url: str):
        self.docker_url = docker_url
        super().__init__(f"unable to parse docker url `{docker_url}`")


class DeployStateError(GovernatorError, RuntimeError):
    """The deploy-state service answered with a failure status."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__("invalid response from deploy-state-service")

"""
Config Module - Black Box Interface

Purpose: Deployer configuration
Interface: DeployerConfig, REQUIRED_OPTIONS
Hidden: Which values are mandatory and how they are reported

Values arrive from CLI flags or their environment variables.
"""

from dataclasses import dataclass
from typing import List, Optional

# Configuration Contract: field name -> (flag, environment variable)
REQUIRED_OPTIONS = {
    "docker_uri": ("--docker-uri", "GOVERNATOR_DOCKER_URI"),
    "redis_uri": ("--redis-uri", "GOVERNATOR_REDIS_URI"),
    "redis_queue": ("--redis-queue", "GOVERNATOR_REDIS_QUEUE"),
    "deploy_state_uri": ("--deploy-state-uri", "DEPLOY_STATE_URI"),
    "cluster": ("--cluster", "CLUSTER"),
}

DEFAULT_DOCKER_URI = "unix:///var/run/docker.sock"
DEFAULT_DOCKER_API_VERSION = "auto"


@dataclass
class DeployerConfig:
    """Deployer configuration."""

    docker_uri: Optional[str] = DEFAULT_DOCKER_URI
    redis_uri: Optional[str] = None
    redis_queue: Optional[str] = None
    deploy_state_uri: Optional[str] = None
    cluster: Optional[str] = None
    docker_api_version: str = DEFAULT_DOCKER_API_VERSION
    interval: float = 1.0
    exit_on_error: bool = False
    deploy_state_timeout: float = 10.0
    log_level: str = "INFO"

    def missing_options(self) -> List[str]:
        """Names of required options that are unset or empty."""
        return [key for key in REQUIRED_OPTIONS if not getattr(self, key)]

    def missing_messages(self) -> List[str]:
        """One human readable line per missing required option."""
        messages = []
        for key in self.missing_options():
            flag, env_var = REQUIRED_OPTIONS[key]
            messages.append(f"Missing required flag {flag} or {env_var}")
        return messages

    @property
    def is_complete(self) -> bool:
        return not self.missing_options()


__all__ = ["DeployerConfig", "REQUIRED_OPTIONS"]

"""
Cluster Module - Black Box Interface

Purpose: Point a Docker Swarm service at a new image
Interface: inspect_service(), update_image(), parse_docker_host()
Hidden: Docker Engine API calls, service spec layout, version tokens

Can be replaced with another orchestrator that supports optimistic
concurrency on service updates.
"""

from .swarm import ServiceState, SwarmCluster, parse_docker_host

__all__ = ["ServiceState", "SwarmCluster", "parse_docker_host"]

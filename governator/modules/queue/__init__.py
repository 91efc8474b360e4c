"""
Queue Module - Black Box Interface

Purpose: Select, claim and validate scheduled deploys
Interface: next_deploy(), lock_deploy(), validate_deploy(), get_metadata()
Hidden: Redis key layout, sorted-set scoring, field names

Multiple deployers may share one queue; lock_deploy() is the only
operation that decides which of them handles a deploy.
"""

from .queue import DeployQueue

__all__ = ["DeployQueue"]

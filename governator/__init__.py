"""
Governator - Docker Swarm Deployment Agent

Watches a Redis-backed schedule of deployments and rolls each due
deployment out to a Docker Swarm service exactly once.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- models: Request metadata, image references and error types
- queue: Deploy schedule selection, claiming and cancellation checks
- cluster: Docker Swarm service inspection and image updates
- tracker: Deploy-state service notifications
- deployer: One claim/validate/apply/report cycle
"""

__version__ = "1.0.0"

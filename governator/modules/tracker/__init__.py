"""
Tracker Module - Black Box Interface

Purpose: Report deploy outcomes to the deploy-state service
Interface: notify_passed(), deployment_url()
Hidden: URL layout, authentication, status code handling
"""

from .deploy_state import DeployStateClient

__all__ = ["DeployStateClient"]

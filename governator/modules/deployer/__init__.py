"""
Deployer Module - Black Box Interface

Purpose: Run one claim/validate/apply/report deploy cycle
Interface: run()
Hidden: Ordering of queue, cluster and tracker calls

The caller owns scheduling: run() does one cycle and returns.
"""

from .deployer import Deployer

__all__ = ["Deployer"]

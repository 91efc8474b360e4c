"""
Models Module - Black Box Interface

Purpose: Shared data shapes and error types for a deploy cycle
Interface: RequestMetadata, ImageReference, parse_image_reference(), CycleOutcome
Hidden: JSON decoding rules, image reference grammar
"""

from .errors import (
    DeployStateError,
    GovernatorError,
    InvalidImageReferenceError,
    MetadataNotFoundError,
)
from .models import CycleOutcome, ImageReference, RequestMetadata, parse_image_reference

__all__ = [
    "CycleOutcome",
    "DeployStateError",
    "GovernatorError",
    "ImageReference",
    "InvalidImageReferenceError",
    "MetadataNotFoundError",
    "RequestMetadata",
    "parse_image_reference",
]

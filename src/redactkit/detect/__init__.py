"""Entity model and the external detector boundary."""

from .base import (
    ENTITY_TYPE_INFO,
    DetectedEntity,
    EntityDetector,
    EntityType,
    EntityTypeInfo,
    mask_token,
    parse_detector_output,
)

__all__ = [
    "ENTITY_TYPE_INFO",
    "DetectedEntity",
    "EntityDetector",
    "EntityType",
    "EntityTypeInfo",
    "mask_token",
    "parse_detector_output",
]

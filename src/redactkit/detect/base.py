"""Core entity model and detector protocol.

This module defines the strongly-typed primitives shared by the detector, the
locator and the applier.  A :class:`DetectedEntity` starts life *unlocated*:
the external detector only reports the literal text and its category.  The
locator later attaches a half-open ``[start, end)`` range into the original
document.  Offsets are either both absent or both present, and a located
entity always satisfies ``0 <= start < end``.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from redactkit.utils.errors import DetectorResponseError, SpanOutOfBoundsError

__all__ = [
    "EntityType",
    "EntityTypeInfo",
    "ENTITY_TYPE_INFO",
    "DetectedEntity",
    "EntityDetector",
    "mask_token",
    "parse_detector_output",
]


class EntityType(Enum):
    """Closed set of entity categories reported by the detector."""

    PERSON = "PERSON"
    LOCATION = "LOCATION"
    EMAIL_ADDRESS = "EMAIL_ADDRESS"
    IP_ADDRESS = "IP_ADDRESS"
    PHONE_NUMBER = "PHONE_NUMBER"
    CREDIT_CARD = "CREDIT_CARD"
    DATE_TIME = "DATE_TIME"
    URL = "URL"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: object) -> "EntityType":
        """Return the member for ``value``; unknown labels map to ``OTHER``."""

        if isinstance(value, EntityType):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace(" ", "_").replace("-", "_")
            try:
                return cls(key)
            except ValueError:
                pass
        return cls.OTHER

    @classmethod
    def detectable(cls) -> list["EntityType"]:
        """Return the labels a detector may be asked for (all but ``OTHER``)."""

        return [t for t in cls if t is not cls.OTHER]


@dataclass(frozen=True, slots=True)
class EntityTypeInfo:
    """Presentation metadata attached to an :class:`EntityType`."""

    display_label: str
    badge: str
    description: str


ENTITY_TYPE_INFO: Mapping[EntityType, EntityTypeInfo] = {
    EntityType.PERSON: EntityTypeInfo("Person", "blue", "Names of people"),
    EntityType.LOCATION: EntityTypeInfo("Location", "emerald", "Cities, countries, addresses"),
    EntityType.EMAIL_ADDRESS: EntityTypeInfo("Email Address", "orange", "Email addresses"),
    EntityType.IP_ADDRESS: EntityTypeInfo("IP Address", "violet", "IPv4 and IPv6 addresses"),
    EntityType.PHONE_NUMBER: EntityTypeInfo("Phone Number", "slate", "Telephone numbers"),
    EntityType.CREDIT_CARD: EntityTypeInfo("Credit Card", "rose", "Card numbers"),
    EntityType.DATE_TIME: EntityTypeInfo("Date Time", "slate", "Specific dates and times"),
    EntityType.URL: EntityTypeInfo("URL", "cyan", "Websites and links"),
    EntityType.OTHER: EntityTypeInfo("Other", "slate", "Unrecognised detector label"),
}


def mask_token(entity_type: EntityType) -> str:
    """Return the placeholder used in ``MASK`` mode, e.g. ``[CREDIT_CARD]``."""

    return f"[{entity_type.value}]"


@dataclass(frozen=True, slots=True)
class DetectedEntity:
    """Entity reported by the detector, optionally resolved to offsets."""

    text: str
    type: EntityType
    start: int | None = None
    end: int | None = None

    def __post_init__(self) -> None:
        if (self.start is None) != (self.end is None):
            raise SpanOutOfBoundsError("start and end must be set together")
        if self.start is not None and self.end is not None:
            if self.start < 0 or self.end <= self.start:
                raise SpanOutOfBoundsError(f"invalid span [{self.start}, {self.end})")

    @property
    def is_located(self) -> bool:
        """Return ``True`` once offsets have been resolved."""

        return self.start is not None and self.end is not None

    @property
    def length(self) -> int:
        """Return the length of ``text`` in characters."""

        return len(self.text)

    @property
    def info(self) -> EntityTypeInfo:
        return ENTITY_TYPE_INFO[self.type]

    def located_at(self, start: int) -> "DetectedEntity":
        """Return a copy resolved to ``[start, start + len(text))``."""

        return replace(self, start=start, end=start + len(self.text))

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"text": self.text, "type": self.type.value}
        if self.is_located:
            data["start"] = self.start
            data["end"] = self.end
        return data


@runtime_checkable
class EntityDetector(Protocol):
    """Protocol for external entity detectors.

    A detector receives the whole document and returns an ordered list of
    unlocated :class:`DetectedEntity` objects.  The order approximates the order
    of appearance; entity text is not guaranteed to be a verbatim substring and
    entities may overlap.
    """

    def name(self) -> str:
        """Return a short, stable identifier for the detector."""

        ...

    def detect(self, text: str) -> list[DetectedEntity]:
        """Detect entities in ``text``."""

        ...


def _strip_code_fence(raw: str) -> str:
    stripped = raw.strip()
    if stripped.startswith("```"):
        stripped = stripped.strip("`").strip()
        if stripped.lower().startswith("json"):
            stripped = stripped[4:]
    return stripped.strip()


def parse_detector_output(raw: str | bytes | Iterable[Any] | None) -> list[DetectedEntity]:
    """Convert raw detector output into unlocated entities.

    Parameters
    ----------
    raw:
        A JSON document (optionally wrapped in a markdown code fence) or an
        already decoded sequence of ``{"text": ..., "type": ...}`` mappings.
        ``None`` and empty strings yield an empty list.

    Raises
    ------
    DetectorResponseError
        If the payload is not a JSON array of objects carrying a string
        ``text`` field.  The whole payload is rejected; no partial list is
        returned.
    """

    if raw is None:
        return []
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        payload = _strip_code_fence(raw)
        if not payload:
            return []
        try:
            items: Any = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise DetectorResponseError(f"detector output is not valid JSON: {exc}") from exc
    else:
        items = raw

    if isinstance(items, Mapping) or not isinstance(items, Iterable):
        raise DetectorResponseError("detector output must be a JSON array")

    entities: list[DetectedEntity] = []
    for idx, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise DetectorResponseError(f"detector item {idx} is not an object")
        text = item.get("text")
        if not isinstance(text, str):
            raise DetectorResponseError(f"detector item {idx} has no string 'text'")
        entities.append(DetectedEntity(text=text, type=EntityType.parse(item.get("type"))))
    return entities

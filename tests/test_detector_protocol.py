from typing import List

from redactkit.detect.base import DetectedEntity, EntityDetector, EntityType


class DummyDetector:
    def name(self) -> str:  # pragma: no cover - trivial
        return "dummy"

    def detect(self, text: str) -> List[DetectedEntity]:
        return [DetectedEntity(text.split()[0], EntityType.PERSON)]


def test_dummy_detector_runtime_checkable() -> None:
    dummy = DummyDetector()
    assert isinstance(dummy, EntityDetector)
    entities = dummy.detect("Alice waved")
    assert isinstance(entities, list)
    assert entities and entities[0].text == "Alice"
    assert entities[0].is_located is False

"""Gemini-backed entity detector.

The detector sends the whole document to a Google Gemini model configured for
JSON output and converts the answer into unlocated
:class:`~redactkit.detect.base.DetectedEntity` objects.  The model is treated as
an opaque collaborator: its output order approximates the order of appearance,
and entity text is not guaranteed to be a verbatim substring of the input.

``google.generativeai`` is imported on demand so that offline invocations (for
example ``redactkit run --entities``) never require the SDK.  A pre-built model
object exposing ``generate_content`` may be injected instead, which is how the
tests exercise this module.

Failures are never retried here.  Transport errors surface as
:class:`DetectorError` and malformed answers as
:class:`DetectorResponseError`.
"""

from __future__ import annotations

from typing import Any

from redactkit.config.schema import DetectorSettings
from redactkit.utils.errors import DetectorError
from redactkit.utils.logging import get_logger

from .base import DetectedEntity, EntityType, parse_detector_output

__all__ = ["SYSTEM_INSTRUCTION", "RESPONSE_SCHEMA", "GeminiDetector"]

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Prompt and response schema
# ---------------------------------------------------------------------------

_TARGETS = "\n".join(
    f"{idx}. {t.value} ({desc})"
    for idx, (t, desc) in enumerate(
        [
            (EntityType.PERSON, "Names of people"),
            (EntityType.LOCATION, "Cities, Countries, Addresses"),
            (EntityType.EMAIL_ADDRESS, "Email addresses"),
            (EntityType.IP_ADDRESS, "IPv4, IPv6"),
            (EntityType.PHONE_NUMBER, "Telephone numbers"),
            (EntityType.CREDIT_CARD, "Card numbers"),
            (EntityType.DATE_TIME, "Specific dates, times"),
            (EntityType.URL, "Websites, links"),
        ],
        start=1,
    )
)

SYSTEM_INSTRUCTION = f"""\
You are a specialized Cybersecurity Data Leakage Prevention (DLP) engine.
Your task is to identify specific sensitive entities in the provided text.

Target Entities:
{_TARGETS}

STRICT EXCLUSION RULES:
- Do NOT include prepositions (e.g., "at", "in", "to", "from", "on", "by") that appear before the entity.
- Do NOT include punctuation marks (periods, commas) that trail the entity.
- Extract ONLY the entity value itself.

Examples:
- Text: "Meeting at 5:00 PM" -> Extract: "5:00 PM" (NOT "at 5:00 PM")
- Text: "Lives in New York" -> Extract: "New York" (NOT "in New York")
- Text: "Sent by john@example.com" -> Extract: "john@example.com" (NOT "by john@example.com")

Return a JSON array of objects. Each object must contain:
- "text": The exact substring found in the original text (excluding the forbidden context).
- "type": The entity type from the list above.

Maintain the order of appearance.
"""

RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "text": {"type": "STRING"},
            "type": {
                "type": "STRING",
                "enum": [t.value for t in EntityType.detectable()],
            },
        },
        "required": ["text", "type"],
    },
}

# ---------------------------------------------------------------------------
# Detector implementation
# ---------------------------------------------------------------------------


class GeminiDetector:
    """Detect sensitive entities with a Gemini generative model."""

    def __init__(self, settings: DetectorSettings, model: Any | None = None) -> None:
        self._settings = settings
        self._model = model

    def name(self) -> str:
        return f"gemini:{self._settings.model}"

    def _load_model(self) -> Any:
        """Create the SDK model lazily and cache it."""

        if self._model is not None:
            return self._model
        try:
            import google.generativeai as genai
        except ImportError as exc:  # pragma: no cover - depends on env
            raise DetectorError(
                "google-generativeai is not installed; install redactkit[gemini]"
            ) from exc

        api_key = self._settings.api_key
        if api_key is None:
            raise DetectorError(
                f"no API key configured; set {self._settings.api_key_env}"
            )
        genai.configure(api_key=api_key.get_secret_value())
        self._model = genai.GenerativeModel(
            self._settings.model,
            system_instruction=SYSTEM_INSTRUCTION,
        )
        return self._model

    def detect(self, text: str) -> list[DetectedEntity]:
        """Return unlocated entities for ``text`` in detector order.

        Blank input short-circuits to an empty list without contacting the
        model.
        """

        if not text.strip():
            return []

        model = self._load_model()
        logger.info("requesting entities from %s for %d chars", self.name(), len(text))
        try:
            response = model.generate_content(
                text,
                generation_config={
                    "response_mime_type": "application/json",
                    "response_schema": RESPONSE_SCHEMA,
                },
            )
            raw = response.text
        except Exception as exc:
            logger.error("entity detection request failed", exc_info=True)
            raise DetectorError(f"Failed to process text with Gemini: {exc}") from exc

        entities = parse_detector_output(raw)
        logger.info("detector returned %d entities", len(entities))
        return entities

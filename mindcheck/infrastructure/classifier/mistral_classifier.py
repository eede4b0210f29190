import json
import logging
from typing import List

from pydantic import ValidationError

from mindcheck.application.ports import ClassificationError, ClassifierOutput, ClassifierPort
from mindcheck.infrastructure.config import Settings


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a mental health text classifier for a self-assessment questionnaire. "
    "You do not diagnose. Classify the answer into exactly one of: "
    "Normal, Stress, Anxiety, Depression, Suicidal. "
    "Return a strict JSON object matching the schema provided."
)

SCHEMA_INSTRUCTIONS = (
    "You MUST return ONLY a valid JSON object. Do NOT include any markdown, code fences, or explanations. "
    "JSON keys: condition (string), confidence (float 0-1), "
    "keywords (array of lowercase strings: the words or short phrases in the answer that drove the label; "
    "include the exact phrase if the answer mentions suicide or wanting to die).\n"
    "Start your response with { and end with }. Return valid JSON only."
)


def extract_json_object(raw: str) -> str:
    raw = raw.strip()
    # Try to extract JSON from response if it's wrapped
    if not raw.startswith('{'):
        start_idx = raw.find('{')
        if start_idx != -1:
            raw = raw[start_idx:]
    if not raw.endswith('}'):
        end_idx = raw.rfind('}')
        if end_idx != -1:
            raw = raw[:end_idx+1]
    return raw


class MistralClassifierAdapter(ClassifierPort):
    def __init__(self, settings: Settings | None = None, client=None):
        self.settings = settings or Settings()
        self._client = client
        self._model = self.settings.mistral_model
        if self._client is None:
            self._init_client()

    def _init_client(self):
        api_key = self.settings.mistral_api_key
        if not api_key:
            logger.error("Mistral API key is missing.")
            self._client = None
            return
        try:
            from mistralai import Mistral
            self._client = Mistral(api_key=api_key)
        except Exception as e:
            logger.exception("Failed to initialize Mistral client: %s", e)
            self._client = None

    def _messages(self, text: str) -> List[dict]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": SCHEMA_INSTRUCTIONS},
            {"role": "user", "content": "Answer: " + text},
        ]

    def classify(self, text: str, timeout: float) -> ClassifierOutput:
        if not self._client:
            raise ClassificationError("Mistral client not initialized (missing API key or import error)")
        try:
            response = self._client.chat.complete(
                model=self._model,
                messages=self._messages(text),
                timeout_ms=int(timeout * 1000),
            )
            raw = response.choices[0].message.content or ""
        except Exception as e:
            logger.exception("Mistral chat call failed: %s", e)
            raise ClassificationError(f"Mistral chat call failed: {e}") from e

        raw = extract_json_object(raw)
        try:
            data = json.loads(raw)
            output = ClassifierOutput(**data)
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning("Classifier JSON invalid: %s. Raw: %s", e, raw[:200])
            raise ClassificationError(f"Classifier returned invalid JSON: {e}") from e

        return output

import logging
import re
import time
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Optional

from gradio_client import Client

from mindcheck.application.ports import ClassificationError, ClassifierOutput, ClassifierPort
from mindcheck.infrastructure.config import Settings


logger = logging.getLogger(__name__)


PREDICTION_RE = re.compile(r"<b>Prediction:</b>\s*([^<]+)")
CONFIDENCE_RE = re.compile(r"<b>Confidence:</b>\s*([0-9.]+)")


def parse_space_output(data: list) -> ClassifierOutput:
    """Turn the Space's `[html, keywords_csv]` output into a ClassifierOutput."""
    html = str(data[0]) if len(data) > 0 and data[0] is not None else ""
    raw_keywords = str(data[1]) if len(data) > 1 and data[1] is not None else ""

    condition_match = PREDICTION_RE.search(html)
    if not condition_match:
        raise ClassificationError("Classifier response has no prediction")

    confidence = 0.0
    confidence_match = CONFIDENCE_RE.search(html)
    if confidence_match:
        try:
            confidence = float(confidence_match.group(1))
        except ValueError:
            confidence = 0.0

    keywords = [k.strip() for k in raw_keywords.split(",") if k.strip()]
    return ClassifierOutput(
        condition=condition_match.group(1).strip(),
        confidence=min(1.0, max(0.0, confidence)),
        keywords=keywords,
    )


class GradioSpaceClassifierAdapter(ClassifierPort):
    """Calls the hosted text-classification Space through the Gradio client."""

    def __init__(self, settings: Settings | None = None, client: Optional[Client] = None):
        self.settings = settings or Settings()
        self.space = self.settings.gradio_space_url
        self.api_name = "/" + self.settings.gradio_api_name.lstrip("/")
        self._client = client

    def _get_client(self) -> Client:
        # Connecting downloads the Space config, so do it once
        if self._client is None:
            self._client = Client(self.space, token=self.settings.hf_token, verbose=False)
        return self._client

    @staticmethod
    def _remaining(deadline: float) -> float:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise ClassificationError("Classifier timed out")
        return remaining

    def classify(self, text: str, timeout: float) -> ClassifierOutput:
        deadline = time.monotonic() + timeout
        try:
            client = self._get_client()
        except Exception as e:
            logger.warning("Could not connect to classifier Space %s: %s", self.space, e)
            raise ClassificationError(f"Could not connect to classifier: {e}") from e

        remaining = self._remaining(deadline)
        job = None
        try:
            job = client.submit(text, api_name=self.api_name)
            data = job.result(timeout=remaining)
        except FutureTimeoutError as e:
            if job is not None:
                job.cancel()
            raise ClassificationError("Classifier timed out") from e
        except Exception as e:
            logger.warning("Classifier request failed: %s", e)
            raise ClassificationError(f"Classifier request failed: {e}") from e

        if not isinstance(data, (list, tuple)):
            raise ClassificationError("Classifier output is not a list")
        return parse_space_output(list(data))

import logging

from mindcheck.application.ports import ClassifierPort
from mindcheck.infrastructure.classifier.gradio_space import GradioSpaceClassifierAdapter
from mindcheck.infrastructure.classifier.mistral_classifier import MistralClassifierAdapter
from mindcheck.infrastructure.config import Settings


logger = logging.getLogger(__name__)


def build_classifier(settings: Settings | None = None) -> ClassifierPort:
    settings = settings or Settings()
    backend = settings.classifier_backend
    if backend == "mistral":
        return MistralClassifierAdapter(settings=settings)
    if backend != "gradio":
        logger.warning("Unknown CLASSIFIER_BACKEND %r; using gradio", backend)
    return GradioSpaceClassifierAdapter(settings=settings)

from .request_builder import VonageRequestBuilder
from .response_classifier import classify, classify_response
from .sender import VonageVerificationSender

__all__ = [
    "VonageRequestBuilder",
    "VonageVerificationSender",
    "classify",
    "classify_response",
]

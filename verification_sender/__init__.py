"""Verification code delivery over the Vonage SMS and voice APIs."""

from .gateway import VonageVerificationSender

__all__ = ["VonageVerificationSender"]

__version__ = "0.1.0"

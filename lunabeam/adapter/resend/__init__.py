"""Resend email adapter."""

from .client import MockNotifier, ResendNotifier, SentInvitation, render_invitation

__all__ = ["MockNotifier", "ResendNotifier", "SentInvitation", "render_invitation"]

"""Session and notification models."""

from .session import Toast, ToastBatch, UserSession

__all__ = ["Toast", "ToastBatch", "UserSession"]

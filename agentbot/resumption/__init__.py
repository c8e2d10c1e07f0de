"""Conversation resumption module."""

from .resumer import ConversationResumer, ResumeHandler

__all__ = ["ConversationResumer", "ResumeHandler"]

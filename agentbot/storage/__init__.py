"""Storage module."""

from .storage import IStorage, Storage, StoreItem, TranscriptEntry

__all__ = ["IStorage", "Storage", "StoreItem", "TranscriptEntry"]

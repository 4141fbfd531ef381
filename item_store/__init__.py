# Speakable item store: checkpoint repositories
from .file_store import FileItemRepository
from .repository import InMemoryItemRepository, ItemRepository

__all__ = ["FileItemRepository", "InMemoryItemRepository", "ItemRepository"]

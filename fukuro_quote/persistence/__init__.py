"""Persistence — JSON file stores for quotes and projects."""

from fukuro_quote.persistence.json_store import JsonFileStore, StorageError
from fukuro_quote.persistence.quote_repository import QuoteStore
from fukuro_quote.persistence.project_repository import ProjectNotFoundError, ProjectStore

__all__ = ["JsonFileStore", "StorageError", "QuoteStore", "ProjectStore", "ProjectNotFoundError"]

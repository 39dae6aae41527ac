from .client import CompletionClient
from .service import AISuggestionService

__all__ = ["AISuggestionService", "CompletionClient"]

"""Import all models so Alembic can discover them via Base.metadata."""
from marketplace_chat.infrastructure.db.models.listing import ListingModel
from marketplace_chat.infrastructure.db.models.message import MessageModel

__all__ = [
    "ListingModel",
    "MessageModel",
]

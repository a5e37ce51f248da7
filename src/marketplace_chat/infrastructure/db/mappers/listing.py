from __future__ import annotations

from marketplace_chat.domain.entities.listing import Listing
from marketplace_chat.infrastructure.db.models.listing import ListingModel


def model_to_entity(model: ListingModel) -> Listing:
    return Listing(
        id=model.id,
        owner_id=model.owner_id,
        title=model.title,
        thumbnail_url=model.thumbnail_url,
        is_active=model.is_active,
    )

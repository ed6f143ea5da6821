"""Server-side services: entity store, seed catalog and query composition."""

from savorist.services.entity_store import EntityStore
from savorist.services.query_service import QueryService
from savorist.services.seed import ensure_seed_data

__all__ = ["EntityStore", "QueryService", "ensure_seed_data"]

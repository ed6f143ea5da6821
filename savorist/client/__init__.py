"""Client side: API access and on-device preference storage."""

from savorist.client.api_client import SavoristClient
from savorist.client.favorites import FAVORITES_KEY, FavoritesStore
from savorist.client.profile import PROFILE_KEY, ProfileStore
from savorist.client.search import RequestSequencer, SearchSession
from savorist.client.storage import FileKeyValueStore, KeyValueStore

__all__ = [
    "FAVORITES_KEY",
    "PROFILE_KEY",
    "FavoritesStore",
    "FileKeyValueStore",
    "KeyValueStore",
    "ProfileStore",
    "RequestSequencer",
    "SavoristClient",
    "SearchSession",
]

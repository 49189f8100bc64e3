"""Application context: one store plus the API client it talks through."""

from dataclasses import dataclass, field

import httpx

from .api import DEFAULT_BASE_URL, ApiClient
from .reducers import REDUCERS
from .store import Store


def create_store() -> Store:
    return Store(REDUCERS)


@dataclass
class AppContext:
    """
    Explicit replacement for a global store.

    Action functions take the context as their first argument, so several
    independent sessions can coexist (one per test, one per user).
    """

    api: ApiClient
    store: Store = field(default_factory=create_store)

    @classmethod
    def create(cls, http: httpx.Client | None = None, base_url: str = DEFAULT_BASE_URL) -> "AppContext":
        return cls(api=ApiClient(http=http, base_url=base_url))

    @property
    def state(self):
        return self.store.state

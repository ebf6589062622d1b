"""FastAPI dependencies for accessing application state."""

from fastapi import Depends, Request

from .store import InMemoryStore


def get_store(request: Request) -> InMemoryStore:
    """
    Store dependency returning the state container of the running app.

    Returns:
        InMemoryStore: Repositories shared by all requests of this app
    """
    return request.app.state.store


StoreDependency = Depends(get_store)

"""
Predictable state container.

State is a read-only mapping of slice name to an immutable snapshot. Each
dispatch runs every reducer with the current slice and the action and swaps
in the new mapping; reducers return new snapshots and never modify the old.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from devconnector.logging import get_logger

logger = get_logger("client.store")

INIT = "@@INIT"


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None


Reducer = Callable[[Any, Action], Any]
Listener = Callable[[Mapping[str, Any]], None]


class Store:
    """
    Holds application state and notifies listeners after every dispatch.

    Usage:
        store = Store({"post": post_reducer})
        store.dispatch(Action(GET_POSTS, posts))
        store.state["post"].posts
    """

    def __init__(self, reducers: Mapping[str, Reducer]):
        self._reducers = dict(reducers)
        self._listeners: list[Listener] = []
        self._state = self._initial_state()

    def _initial_state(self) -> Mapping[str, Any]:
        init = Action(INIT)
        return MappingProxyType({name: reducer(None, init) for name, reducer in self._reducers.items()})

    @property
    def state(self) -> Mapping[str, Any]:
        return self._state

    def dispatch(self, action: Action) -> Action:
        previous = self._state
        self._state = MappingProxyType(
            {name: reducer(previous[name], action) for name, reducer in self._reducers.items()}
        )
        logger.debug("action_dispatched", action=action.type)
        for listener in list(self._listeners):
            listener(self._state)
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def reset(self) -> None:
        """Drop all state, e.g. on logout. Listeners stay registered."""
        self._state = self._initial_state()
        for listener in list(self._listeners):
            listener(self._state)

"""List Views & Refetch Coordinator - invalidate-and-refetch cache consistency.

Invariants:
    - ListView states: Idle -> Loading -> Loaded(data) | Error(detail)
    - load() never raises; failures become the Error state
    - Only the most recently issued load of a view may set its final state
      (an older, slower response is dropped)
    - RefetchCoordinator.mutate() re-lists every registered view of the mutated
      kind after the mutation response is observed, whether it succeeded or not;
      no diffing or local patching of results

Design Decisions:
    - Refetch over optimistic patching: the server normalizes input (trimming,
      timestamps, end_date clearing) and the client must not guess the result
    - Listeners are plain callables, called on every state transition
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from folio.core.aggregates import compute_dashboard_stats
from folio.core.domain_types import ResourceKind
from folio.core.errors import FolioError, StoreUnavailableError
from folio.client.api_client import FolioClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ListStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class ListState:
    """Snapshot of one list view."""
    status: ListStatus = ListStatus.IDLE
    data: list = field(default_factory=list)
    error: FolioError | None = None


class ListView:
    """One mounted list of a resource kind."""

    def __init__(self, kind: ResourceKind, fetch: Callable[[], Awaitable[list]]):
        self.kind = kind
        self._fetch = fetch
        self._generation = 0
        self._listeners: list[Callable[[ListState], None]] = []
        self.state = ListState()

    @property
    def data(self) -> list:
        return self.state.data

    def subscribe(self, listener: Callable[[ListState], None]) -> None:
        self._listeners.append(listener)

    def _set(self, state: ListState) -> None:
        self.state = state
        for listener in self._listeners:
            listener(state)

    async def load(self) -> ListState:
        """Issue the list query: Loading, then Loaded or Error."""
        self._generation += 1
        generation = self._generation
        self._set(ListState(status=ListStatus.LOADING))
        try:
            data = await self._fetch()
        except FolioError as e:
            outcome = ListState(status=ListStatus.ERROR, error=e)
        except Exception as e:
            logger.error(
                f"List load failed unexpectedly: {e}",
                exc_info=True, extra={"resource_kind": self.kind.value},
            )
            outcome = ListState(
                status=ListStatus.ERROR, error=StoreUnavailableError("list"),
            )
        else:
            outcome = ListState(status=ListStatus.LOADED, data=list(data))

        if generation == self._generation:
            self._set(outcome)
        return self.state


class RefetchCoordinator:
    """Keeps every mounted view consistent with the store after mutations."""

    def __init__(self, client: FolioClient):
        self._client = client
        self._views: dict[ResourceKind, list[ListView]] = {
            kind: [] for kind in ResourceKind
        }

    def watch(self, kind: ResourceKind) -> ListView:
        """Create and register a view for a kind (call load() to mount it)."""
        view = ListView(kind, lambda: self._client.list_all(kind))
        self._views[kind].append(view)
        return view

    def unwatch(self, view: ListView) -> None:
        if view in self._views[view.kind]:
            self._views[view.kind].remove(view)

    def views(self, kind: ResourceKind) -> list[ListView]:
        return list(self._views[kind])

    async def refetch(self, kind: ResourceKind) -> None:
        """Re-issue the list query of every view of this kind, unconditionally."""
        views = self._views[kind]
        if views:
            await asyncio.gather(*(view.load() for view in views))

    async def mutate(self, kind: ResourceKind, mutation: Callable[[], Awaitable[T]]) -> T:
        """Run a mutation, then refetch the kind's views once it has completed."""
        try:
            return await mutation()
        finally:
            await self.refetch(kind)

    def dashboard_stats(self) -> dict[str, Any]:
        """Aggregates over the first loaded view of each kind; recomputed per call."""
        return compute_dashboard_stats(
            self._snapshot(ResourceKind.PORTFOLIO),
            self._snapshot(ResourceKind.EXPERIENCE),
        )

    def _snapshot(self, kind: ResourceKind) -> list:
        for view in self._views[kind]:
            if view.state.status == ListStatus.LOADED:
                return view.data
        return []

"""Session state for one planning conversation.

The session owns the household preferences, the current plan and the current
store search. Every change produces a new immutable :class:`SessionState`
snapshot. Each pipeline tags its requests with a generation number so that a
slow, stale response can never overwrite the result of a newer request.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, fields, replace
from typing import List, Optional, Sequence

from .client import ApiError, PlannerApiClient
from .context import build_user_context
from .fixtures import StoreSource
from .models import NOTES_MAX_LENGTH, PlanData, Preferences, Store
from .planner import map_recipes_response
from .stores import StoreAggregator, normalize_zip

logger = logging.getLogger(__name__)

PLAN_PIPELINE = "plan"
STORES_PIPELINE = "stores"

_PREFERENCE_FIELDS = {item.name for item in fields(Preferences)}


@dataclass(frozen=True)
class SessionState:
    preferences: Preferences = field(default_factory=Preferences)
    plan: Optional[PlanData] = None
    plan_error: Optional[str] = None
    store_zip: str = ""
    stores: List[Store] = field(default_factory=list)
    stores_error: Optional[str] = None


class PlanningSession:
    """Runs the plan and store pipelines against one shared session state."""

    def __init__(
        self,
        client: PlannerApiClient,
        local_sources: Optional[Sequence[StoreSource]] = None,
        preferences: Optional[Preferences] = None,
    ) -> None:
        self.client = client
        self.aggregator = StoreAggregator(client, local_sources)
        self._lock = threading.Lock()
        self._generations = {PLAN_PIPELINE: 0, STORES_PIPELINE: 0}
        self._state = SessionState(preferences=preferences or Preferences())

    @property
    def state(self) -> SessionState:
        return self._state

    def _begin(self, pipeline: str) -> int:
        with self._lock:
            self._generations[pipeline] += 1
            return self._generations[pipeline]

    def _commit(self, pipeline: str, generation: int, **changes) -> SessionState:
        with self._lock:
            if generation != self._generations[pipeline]:
                logger.debug(
                    "Discarding stale %s response (generation %d, latest %d)",
                    pipeline,
                    generation,
                    self._generations[pipeline],
                )
                return self._state
            self._state = replace(self._state, **changes)
            return self._state

    def update_preferences(self, **changes) -> SessionState:
        unknown = set(changes) - _PREFERENCE_FIELDS
        if unknown:
            raise TypeError(f"Unknown preference fields: {', '.join(sorted(unknown))}")
        if "notes" in changes:
            changes["notes"] = str(changes["notes"])[:NOTES_MAX_LENGTH]
        with self._lock:
            preferences = replace(self._state.preferences, **changes)
            self._state = replace(self._state, preferences=preferences)
            return self._state

    def generate_plan(self) -> SessionState:
        """Request a plan for the current preferences.

        A failed request clears any previous plan and records the error
        message instead.
        """
        generation = self._begin(PLAN_PIPELINE)
        user_context = build_user_context(self._state.preferences)
        try:
            payload = self.client.fetch_recipes(user_context)
        except ApiError as exc:
            return self._commit(PLAN_PIPELINE, generation, plan=None, plan_error=str(exc))
        return self._commit(
            PLAN_PIPELINE,
            generation,
            plan=map_recipes_response(payload),
            plan_error=None,
        )

    def load_stores(self, zip_code: str) -> SessionState:
        generation = self._begin(STORES_PIPELINE)
        normalized = normalize_zip(zip_code)
        if len(normalized) != 5:
            return self._commit(
                STORES_PIPELINE, generation, store_zip=normalized, stores=[], stores_error=None
            )
        try:
            stores = self.aggregator.find_stores(normalized)
        except ApiError as exc:
            return self._commit(
                STORES_PIPELINE, generation, store_zip=normalized, stores=[], stores_error=str(exc)
            )
        return self._commit(
            STORES_PIPELINE, generation, store_zip=normalized, stores=stores, stores_error=None
        )

    def reset(self) -> SessionState:
        with self._lock:
            for pipeline in self._generations:
                # In-flight responses become stale.
                self._generations[pipeline] += 1
            self._state = SessionState()
            return self._state

"""
Weather-reactive advice: indoor swap proposals for wet days and outdoor nudges for clear ones.

Proposals are never applied on their own. Per day the advisor moves through
``balanced -> proposal_pending -> swapped``; dismissing a proposal returns the
day to ``balanced``. Each evaluation recomputes every day from scratch.
"""

import logging
from typing import Dict, List, Mapping, Optional

from .catalog import Catalog
from .conditions import is_adverse, is_clear
from .errors import ConflictError, DuplicateError, NotFoundError
from .intervals import find_conflict
from .models import OutdoorNudge, SwapProposal, SwapState
from .observability import log_event, metrics
from .store import ScheduleStore

logger = logging.getLogger("weekendly.advisor")

# Maximum duration difference between an outdoor activity and its indoor replacement
SWAP_DURATION_TOLERANCE = 30


def find_swap_proposals(
    store: ScheduleStore,
    catalog: Catalog,
    weather_by_day: Mapping[str, Optional[int]],
) -> List[SwapProposal]:
    """
    One proposal per adverse-weather day that has an outdoor activity.

    The first outdoor activity of the day is paired with the first indoor
    catalog activity that is not planned or bucketed, lasts within 30 minutes
    of it, has not been offered for another day in this pass, and fits the day
    at the outdoor activity's start time once that activity is gone.
    """
    proposals: List[SwapProposal] = []
    offered = set()

    for day in store.days:
        code = weather_by_day.get(day)
        if not is_adverse(code):
            continue

        items = store.activities_on(day)
        outdoor = next((a for a in items if a.category == "Outdoor"), None)
        if outdoor is None:
            continue
        remaining = [a for a in items if a.id != outdoor.id]

        for candidate in catalog.get_all_activities():
            if candidate.category != "Indoor" or candidate.id in offered:
                continue
            if store.locate(candidate.id):
                continue
            if abs(candidate.duration_minutes - outdoor.duration_minutes) > SWAP_DURATION_TOLERANCE:
                continue
            replacement = candidate.with_time(outdoor.time)
            if find_conflict(replacement, remaining):
                continue

            offered.add(candidate.id)
            proposals.append(SwapProposal(
                day=day,
                from_activity=outdoor,
                to_activity=replacement,
                weather_code=code,
            ))
            break

    return proposals


def apply_swap(store: ScheduleStore, proposal: SwapProposal) -> None:
    """
    Replace the proposal's outdoor activity with its indoor alternative.

    Everything is re-checked against the current store before any change, so a
    stale proposal fails without removing the original activity.
    """
    day = proposal.day
    items = store.activities_on(day)
    original = proposal.from_activity
    replacement = proposal.to_activity

    if not any(a.id == original.id for a in items):
        raise NotFoundError(f"{original.name} is no longer planned on {day}.", activity_id=original.id, day=day)

    location = store.locate(replacement.id)
    if location:
        raise DuplicateError(replacement.id, location)

    remaining = [a for a in items if a.id != original.id]
    conflict = find_conflict(replacement, remaining)
    if conflict:
        raise ConflictError(day, replacement.id, conflict.id, conflict.name)

    store.remove_from_day(day, original.id)
    store.place_on_day(day, replacement)


def find_outdoor_nudges(
    store: ScheduleStore,
    weather_by_day: Mapping[str, Optional[int]],
) -> List[OutdoorNudge]:
    """Clear days where more than half of the planned activities are indoors."""
    nudges: List[OutdoorNudge] = []
    for day in store.days:
        if not is_clear(weather_by_day.get(day)):
            continue
        items = store.activities_on(day)
        indoor = sum(1 for a in items if a.category == "Indoor")
        if items and indoor > len(items) / 2:
            nudges.append(OutdoorNudge(
                day=day,
                indoor_count=indoor,
                total_count=len(items),
                message=f"Perfect weather for {day}! Consider adding some outdoor activities to enjoy the sunshine.",
            ))
    return nudges


class SwapAdvisor:
    """Tracks pending proposals and the per-day swap state."""

    def __init__(self):
        self._pending: Dict[str, SwapProposal] = {}
        self._states: Dict[str, SwapState] = {}

    def state(self, day: str) -> SwapState:
        return self._states.get(day, "balanced")

    def pending(self) -> List[SwapProposal]:
        return list(self._pending.values())

    def evaluate(
        self,
        store: ScheduleStore,
        catalog: Catalog,
        weather_by_day: Mapping[str, Optional[int]],
    ) -> List[SwapProposal]:
        proposals = find_swap_proposals(store, catalog, weather_by_day)
        self._pending = {p.day: p for p in proposals}

        states: Dict[str, SwapState] = {}
        for day in store.days:
            if day in self._pending:
                states[day] = "proposal_pending"
            elif self._states.get(day) == "swapped":
                states[day] = "swapped"
            else:
                states[day] = "balanced"
        self._states = states

        if proposals:
            metrics.incr("swap_proposals_total", len(proposals))
            log_event(
                logger,
                logging.INFO,
                "swap_proposals",
                days=[p.day for p in proposals],
            )
        return proposals

    def confirm(self, store: ScheduleStore, day: str) -> SwapProposal:
        proposal = self._pending.get(day)
        if proposal is None:
            raise NotFoundError(f"No pending swap proposal for {day}.", day=day)

        # Stale or not, the proposal is consumed; a failed swap leaves the day as it was
        del self._pending[day]
        try:
            apply_swap(store, proposal)
        except (ConflictError, DuplicateError, NotFoundError):
            self._states[day] = "balanced"
            raise

        self._states[day] = "swapped"
        metrics.incr("swaps_confirmed_total")
        return proposal

    def dismiss(self, day: str) -> SwapProposal:
        proposal = self._pending.pop(day, None)
        if proposal is None:
            raise NotFoundError(f"No pending swap proposal for {day}.", day=day)
        self._states[day] = "balanced"
        return proposal

    def forget_days(self, days: List[str]) -> None:
        """Drop state for days no longer in the weekend."""
        for day in list(self._pending):
            if day not in days:
                del self._pending[day]
        for day in list(self._states):
            if day not in days:
                del self._states[day]

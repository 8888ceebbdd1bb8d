"""Removing a single day from a boarding stay.

Staff work from a day view and ask to take an animal off *that* day only,
while storage keeps one row per continuous stay. Depending on where the day
sits in the stay the reservation is deleted, shortened at either end, or
split into two stays around the removed day.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING

from boarding.schemas.reservation import ReservationRead, ReservationWrite
from boarding.services.interval_service import ONE_DAY, normalize_day

if TYPE_CHECKING:
    from boarding.services.reservation_store import ReservationStore

logger = logging.getLogger(__name__)


class DayRemovalOutcome(str, enum.Enum):
    NO_OP = "no-op"
    FULL_DELETE = "full-delete"
    SHRINK_START = "shrink-start"
    SHRINK_END = "shrink-end"
    SPLIT = "split"


@dataclass(slots=True, frozen=True)
class DayRemovalPlan:
    """Store operations needed to drop one day from a reservation."""

    outcome: DayRemovalOutcome
    reservation_id: str
    update: ReservationWrite | None = None
    create: ReservationWrite | None = None

    @property
    def mutates(self) -> bool:
        return self.outcome is not DayRemovalOutcome.NO_OP


def plan_day_removal(
    reservation: ReservationRead, day: date | datetime
) -> DayRemovalPlan:
    """Decide how removing ``day`` changes ``reservation``.

    Exactly one outcome applies for any input; a day outside the stay is a
    no-op and never results in a store call.
    """
    start = normalize_day(reservation.start_date)
    end = normalize_day(reservation.end_date)
    target = normalize_day(day)

    if not start <= target <= end:
        return DayRemovalPlan(DayRemovalOutcome.NO_OP, reservation.id)

    if start == end:
        return DayRemovalPlan(DayRemovalOutcome.FULL_DELETE, reservation.id)

    if target == start:
        return DayRemovalPlan(
            DayRemovalOutcome.SHRINK_START,
            reservation.id,
            update=reservation.to_write(start_date=start + ONE_DAY),
        )

    if target == end:
        return DayRemovalPlan(
            DayRemovalOutcome.SHRINK_END,
            reservation.id,
            update=reservation.to_write(end_date=end - ONE_DAY),
        )

    # The original keeps its id for the first half; the second half is a new stay.
    return DayRemovalPlan(
        DayRemovalOutcome.SPLIT,
        reservation.id,
        update=reservation.to_write(end_date=target - ONE_DAY),
        create=reservation.to_write(
            id=None, start_date=target + ONE_DAY, end_date=end
        ),
    )


async def apply_plan(store: ReservationStore, plan: DayRemovalPlan) -> None:
    """Issue the plan's writes in order, awaiting each one.

    Writes are not transactional: when the second write of a split fails the
    shortened original stays in place and the error propagates.
    """
    if plan.outcome is DayRemovalOutcome.NO_OP:
        return
    if plan.outcome is DayRemovalOutcome.FULL_DELETE:
        await store.delete(plan.reservation_id)
        return
    if plan.update is not None:
        await store.upsert(plan.update)
    if plan.create is not None:
        await store.upsert(plan.create)


async def remove_day(
    store: ReservationStore,
    reservation: ReservationRead,
    day: date | datetime,
) -> DayRemovalPlan:
    """Plan and apply the removal of ``day`` from ``reservation``."""
    plan = plan_day_removal(reservation, day)
    logger.info(
        "Removing %s from reservation %s: %s",
        normalize_day(day).isoformat(),
        reservation.id,
        plan.outcome.value,
    )
    await apply_plan(store, plan)
    return plan

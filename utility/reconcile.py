import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from utility.availability import AvailabilityMonitor, Transition
from utility.errors import StoreError
from utility.logger import get_logger
log = get_logger()

@dataclass
class TickResult:
    expired: int = 0
    paused: int = 0
    resumed: int = 0
    redisplay: bool = False


def reconcile(state, transition: Optional[Transition], now: int) -> TickResult:
    """
    Apply one tick to the objective store.

    Expired objectives are swept before any freeze, so an objective whose
    deadline is exactly now is deleted rather than frozen with nothing left.
    Freeze and resume capture the time left at this exact now.
    Args:
        state (State): Runtime state holding the store and the availability flag.
        transition (Transition | None): Edge reported by the availability monitor this tick.
        now (int): Epoch seconds of this tick.
    Returns:
        TickResult: What changed, and whether the board must be redrawn.
    """
    result = TickResult()

    result.expired = state.store.delete_expired_active(now)
    if result.expired:
        log.info(f"Reconcile: {result.expired} objectives expired")
        result.redisplay = True

    if transition is Transition.BECAME_OFFLINE:
        result.paused = state.store.mark_all_active_as_paused(now)
        state.server_online = False
        log.info(f"Reconcile: server offline, paused {result.paused} objectives")
        result.redisplay = True
    elif transition is Transition.BECAME_ONLINE:
        result.resumed = state.store.resume_all_paused(now)
        state.server_online = True
        log.info(f"Reconcile: server online, resumed {result.resumed} objectives")
        result.redisplay = True

    return result


async def run_tick(state, monitor: AvailabilityMonitor, refresh: Callable[[], Awaitable[object]],
                   clock: Callable[[], float] = time.time) -> TickResult:
    """
    One status tick: poll availability, reconcile, and redraw the board at most once.
    The poll happens outside the state lock, the store work and redraw inside it.
    """
    transition = await monitor.poll()
    async with state.lock:
        now = int(clock())
        try:
            result = reconcile(state, transition, now)
        except StoreError as e:
            log.error(f"Reconcile: tick aborted: {e}")
            # The edge was not applied, let the next poll report it again
            monitor.online = state.server_online
            # An expiry sweep may already have committed before the failure
            result = TickResult(redisplay=True)
        if result.redisplay:
            try:
                await refresh()
            except StoreError as e:
                log.error(f"Reconcile: board refresh failed: {e}")
    return result

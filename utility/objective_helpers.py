from typing import List, Optional, Sequence, Tuple

from utility.errors import ValidationError
from utility.logger import get_logger
log = get_logger()

# Longest objective timer accepted from operators
MAX_HOURS = 168
MAX_DURATION_SECONDS = MAX_HOURS * 3600

def objective_duration(hours: int, minutes: int) -> int:
    """Duration in seconds for an hours/minutes pair, at most MAX_HOURS in total."""
    if hours < 0 or minutes < 0:
        raise ValidationError("Hours and minutes cannot be negative")
    duration = hours * 3600 + minutes * 60
    if duration > MAX_DURATION_SECONDS:
        raise ValidationError(f"Objectives cannot last longer than {MAX_HOURS} hours")
    return duration

def validate_choice(value: str, vocabulary: Sequence[str], what: str):
    if value not in vocabulary:
        raise ValidationError(f"Unknown {what}: {value}")

def create_objective(state, hours: int, minutes: int, objective: str, zone: str,
                     now: int) -> Tuple[int, Optional[int]]:
    """
    Start tracking an objective. While the server is online it gets an absolute
    deadline, while it is down it is stored paused with its full duration.
    Returns:
        (id, end_time): end_time is None when the objective was created paused.
    Raises:
        ValidationError: Unknown objective or zone, or a negative or too long duration.
    """
    validate_choice(objective, state.store.kinds, "objective")
    validate_choice(zone, state.store.zones, "zone")
    duration = objective_duration(hours, minutes)

    if state.server_online:
        end_time = now + duration
        objective_id = state.store.insert(objective, zone, end_time=end_time)
    else:
        end_time = None
        objective_id = state.store.insert(objective, zone, remaining_seconds=duration)
    log.info(f"Objective {objective_id}: {objective} in {zone} for {hours}h {minutes}m "
             f"({'paused' if end_time is None else 'active'})")
    return objective_id, end_time

def clear_objectives(state) -> int:
    cleared = state.store.clear_all()
    log.info(f"Cleared {cleared} objectives")
    return cleared

def _matches_word_start(choice: str, needle: str) -> bool:
    """
    True if needle occurs in choice where a word begins, so "ore" finds
    "4.4 Ore" but not "Power Core". Needles starting with punctuation match anywhere.
    """
    if not needle or not needle[0].isalnum():
        return needle in choice
    start = choice.find(needle)
    while start != -1:
        if start == 0 or not choice[start - 1].isalnum():
            return True
        start = choice.find(needle, start + 1)
    return False

def autocomplete(vocabulary: Sequence[str], current: str, limit: int = 25) -> List[str]:
    """Case-insensitive matches at word starts, in vocabulary order, at most limit of them."""
    needle = (current or "").strip().lower()
    return [choice for choice in vocabulary if _matches_word_start(choice.lower(), needle)][:limit]

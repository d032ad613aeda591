"""
Post-commit effects
Work that follows a booking write: attendance rows, the calendar mirror and
equipment status. Each effect runs on its own; a failure is logged and the
rest still run. The booking write itself is never rolled back.
"""
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional


@dataclass
class PostCommitEffect:
    name: str
    run: Callable[[], Awaitable[object]]


@dataclass
class EffectOutcome:
    name: str
    ok: bool
    error: Optional[str] = None


async def run_post_commit(booking_id: str, effects: List[PostCommitEffect]) -> List[EffectOutcome]:
    outcomes = []
    for effect in effects:
        try:
            await effect.run()
            outcomes.append(EffectOutcome(effect.name, True))
        except Exception as e:
            logging.warning(f"Post-commit effect '{effect.name}' failed for booking {booking_id}: {e}")
            outcomes.append(EffectOutcome(effect.name, False, str(e)))
    return outcomes

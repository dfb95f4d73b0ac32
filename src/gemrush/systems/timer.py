from __future__ import annotations

import logging

from esper import World

from gemrush.components.countdown_timer import CountdownTimer
from gemrush.components.game_state import SessionPhase
from gemrush.events.bus import EVENT_GAME_OVER, EVENT_TICK, EVENT_TIMER_CHANGED, EventBus
from gemrush.utils.game_state import get_game_state, set_phase

logger = logging.getLogger(__name__)


def get_timer(world: World) -> tuple[int, CountdownTimer] | None:
    for entity, timer in world.get_component(CountdownTimer):
        return entity, timer
    return None


def start_timer(world: World, budget: int) -> int:
    """Create the session timer, replacing any existing one."""
    stop_timer(world)
    return world.create_entity(CountdownTimer(budget=budget, time_left=budget))


def stop_timer(world: World) -> None:
    for entity in [ent for ent, _ in world.get_component(CountdownTimer)]:
        world.delete_entity(entity, immediate=True)


class TimerSystem:
    """Counts the session budget down in whole seconds and ends the game at zero.

    Game over applies from any phase, including mid-cascade. The timer entity
    is deleted at that point so nothing keeps ticking for a finished session.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        found = get_timer(self.world)
        if found is None:
            return
        _, timer = found
        state = get_game_state(self.world)
        if state.is_over:
            return
        timer.elapsed += dt
        changed = False
        while timer.elapsed >= 1.0 and timer.time_left > 0:
            timer.elapsed -= 1.0
            timer.time_left -= 1
            changed = True
        if changed:
            self.event_bus.emit(EVENT_TIMER_CHANGED, time_left=timer.time_left, budget=timer.budget)
        if timer.expired:
            self._game_over(timer)

    def _game_over(self, timer: CountdownTimer):
        state = get_game_state(self.world)
        completion_seconds = timer.seconds_used
        stop_timer(self.world)
        state.selection = None
        state.combo = 0
        set_phase(self.world, self.event_bus, SessionPhase.GAME_OVER)
        logger.info("Game over: score=%d moves=%d", state.score, state.moves)
        self.event_bus.emit(
            EVENT_GAME_OVER,
            score=state.score,
            moves=state.moves,
            completion_seconds=completion_seconds,
        )

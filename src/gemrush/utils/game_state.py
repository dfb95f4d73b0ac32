from __future__ import annotations

from esper import World

from gemrush.components.game_state import GameState, SessionPhase
from gemrush.components.gem_registry import GemRegistry
from gemrush.components.gem_source import GemSource
from gemrush.events.bus import EVENT_PHASE_CHANGED, EventBus


def get_game_state(world: World) -> GameState:
    for _, state in world.get_component(GameState):
        return state
    raise RuntimeError("GameState not found")


def get_gem_source(world: World) -> GemSource:
    for _, registry in world.get_component(GemRegistry):
        return registry.source
    raise RuntimeError("GemSource not found")


def set_phase(world: World, event_bus: EventBus, phase: SessionPhase) -> None:
    """Update the session phase and emit a change event when it differs."""

    state = get_game_state(world)
    previous_phase = state.phase
    if previous_phase == phase:
        return
    state.phase = phase
    event_bus.emit(
        EVENT_PHASE_CHANGED,
        previous_phase=previous_phase,
        new_phase=phase,
    )

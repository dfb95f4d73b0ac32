from __future__ import annotations

from typing import Any

from esper import World

from gemrush.components.scheduled_step import ScheduledStep
from gemrush.events.bus import (
    EVENT_GAME_OVER,
    EVENT_GAME_RESET_REQUEST,
    EVENT_SCHEDULE_STEP,
    EVENT_STEP_DUE,
    EVENT_TICK,
    EventBus,
)


class SchedulerSystem:
    """Paces controller steps against tick time.

    Each pending step is its own entity with a ScheduledStep component. Ticks
    count them down and emit EVENT_STEP_DUE with the step's kind and payload.
    A non-positive delay fires at once, which lets tests run whole turns
    without ticking. Game over and reset drop every pending step.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_SCHEDULE_STEP, self.on_schedule_step)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_cancel)
        self.event_bus.subscribe(EVENT_GAME_RESET_REQUEST, self.on_cancel)

    def schedule(self, kind: str, delay: float, **payload: Any) -> int | None:
        if delay <= 0.0:
            self.event_bus.emit(EVENT_STEP_DUE, kind=kind, **payload)
            return None
        return self.world.create_entity(ScheduledStep(kind=kind, remaining=float(delay), payload=payload))

    def pending(self) -> list[ScheduledStep]:
        return [step for _, step in self.world.get_component(ScheduledStep)]

    def cancel_all(self) -> int:
        entities = [ent for ent, _ in self.world.get_component(ScheduledStep)]
        for ent in entities:
            self.world.delete_entity(ent, immediate=True)
        return len(entities)

    def on_schedule_step(self, sender, **kwargs):
        kind = kwargs.get('kind')
        if not kind:
            return
        self.schedule(kind, kwargs.get('delay', 0.0), **(kwargs.get('payload') or {}))

    def on_cancel(self, sender, **kwargs):
        self.cancel_all()

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        # Snapshot: steps scheduled by handlers below wait for the next tick.
        due: list[tuple[int, ScheduledStep]] = []
        for ent, step in list(self.world.get_component(ScheduledStep)):
            step.remaining -= dt
            if step.remaining <= 0.0:
                due.append((ent, step))
        for ent, step in due:
            if not self.world.entity_exists(ent):
                # Cancelled by an earlier handler in this tick.
                continue
            self.world.delete_entity(ent, immediate=True)
            self.event_bus.emit(EVENT_STEP_DUE, kind=step.kind, **step.payload)

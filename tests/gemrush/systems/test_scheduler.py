from esper import World

from gemrush.events.bus import EVENT_GAME_OVER, EVENT_GAME_RESET_REQUEST, EVENT_STEP_DUE, EventBus
from gemrush.systems.scheduler import SchedulerSystem


def setup_scheduler():
    bus = EventBus()
    scheduler = SchedulerSystem(World(), bus)
    fired = []
    bus.subscribe(EVENT_STEP_DUE, lambda sender, **kw: fired.append(kw))
    return bus, scheduler, fired


def test_step_fires_after_delay():
    bus, scheduler, fired = setup_scheduler()
    scheduler.schedule('ping', 0.5, depth=2)
    bus.emit('tick', dt=0.25)
    assert fired == []
    bus.emit('tick', dt=0.25)
    assert fired == [{'kind': 'ping', 'depth': 2}]
    assert scheduler.pending() == []


def test_zero_delay_fires_synchronously():
    bus, scheduler, fired = setup_scheduler()
    assert scheduler.schedule('now', 0.0) is None
    assert fired == [{'kind': 'now'}]


def test_steps_scheduled_while_firing_wait_for_next_tick():
    bus, scheduler, fired = setup_scheduler()

    def chain(sender, **kw):
        if kw['kind'] == 'first':
            scheduler.schedule('second', 0.25)

    bus.subscribe(EVENT_STEP_DUE, chain)
    scheduler.schedule('first', 0.25)
    bus.emit('tick', dt=1.0)
    assert [f['kind'] for f in fired] == ['first']
    bus.emit('tick', dt=0.25)
    assert [f['kind'] for f in fired] == ['first', 'second']


def test_game_over_and_reset_cancel_pending_steps():
    bus, scheduler, fired = setup_scheduler()
    scheduler.schedule('a', 1.0)
    scheduler.schedule('b', 2.0)
    assert len(scheduler.pending()) == 2
    bus.emit(EVENT_GAME_OVER, score=0, moves=0, completion_seconds=60)
    assert scheduler.pending() == []
    scheduler.schedule('c', 1.0)
    bus.emit(EVENT_GAME_RESET_REQUEST)
    bus.emit('tick', dt=5.0)
    assert fired == []

"""Shared fixtures for the test suite."""

from schedsim.core.engine import SchedulerEngine
from schedsim.core.task_scheduler import VirtualTaskScheduler
from schedsim.utils.random_source import RandomSource

EPOCH = 1_700_000_000.0


class ScriptedRandomSource(RandomSource):
    """Random source replaying fixed integer and float sequences.

    Once a sequence is exhausted the lower bound of the requested range is
    returned.
    """

    def __init__(self, ints=None, floats=None):
        super().__init__(seed=0)
        self.ints = list(ints or [])
        self.floats = list(floats or [])

    def randint(self, low, high):
        if not self.ints:
            return low
        value = self.ints.pop(0)
        if not low <= value < high:
            raise ValueError(f"Scripted value {value} outside [{low}, {high})")
        return value

    def uniform(self, low, high):
        if not self.floats:
            return low
        return self.floats.pop(0)


class EventRecorder:
    """Subscriber keeping every event it receives."""

    def __init__(self):
        self.events = []

    def __call__(self, event, payload):
        self.events.append((event, payload))

    def of(self, event):
        return [payload for e, payload in self.events if e is event]

    def types(self):
        return [e for e, _ in self.events]

    def clear(self):
        self.events.clear()


def make_engine(ints=None, config=None, random_source=None):
    """Engine on a virtual clock with a recorder attached.

    Returns:
        Tuple of (engine, scheduler, recorder)
    """
    scheduler = VirtualTaskScheduler()
    engine = SchedulerEngine(
        config or {},
        task_scheduler=scheduler,
        random_source=random_source or ScriptedRandomSource(ints),
        clock=lambda: EPOCH + scheduler.now(),
    )
    recorder = EventRecorder()
    engine.subscribe(recorder)
    return engine, scheduler, recorder

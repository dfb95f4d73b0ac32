from dataclasses import dataclass


@dataclass(slots=True)
class CountdownTimer:
    """Session countdown. The entity holding it is the session's single timer handle.

    ``elapsed`` accumulates tick time until a whole second can be taken off
    ``time_left``.
    """
    budget: int
    time_left: int
    elapsed: float = 0.0

    @property
    def expired(self) -> bool:
        return self.time_left <= 0

    @property
    def seconds_used(self) -> int:
        return self.budget - max(self.time_left, 0)

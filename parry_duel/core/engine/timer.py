"""One-shot countdown timer for encounter phases.

A phase timer tracks elapsed time against a target duration. It is advanced
only by externally supplied deltas, so nothing in the encounter core ever
sleeps or reads the wall clock.
"""


class PhaseTimer:
    """Countdown timer that saturates at its target.

    Elapsed time is monotonically non-decreasing until ``reset`` is called,
    and never grows past the target duration.
    """

    def __init__(self, target: float):
        self._target = float(target)
        self._elapsed = 0.0

    @property
    def target(self) -> float:
        """Duration the timer counts towards."""
        return self._target

    @property
    def elapsed(self) -> float:
        """Time accumulated since the timer was created or last reset."""
        return self._elapsed

    @property
    def finished(self) -> bool:
        """True once elapsed time has reached the target."""
        return self._elapsed >= self._target

    @property
    def remaining(self) -> float:
        return max(0.0, self._target - self._elapsed)

    @property
    def progress(self) -> float:
        """Fraction of the target that has elapsed, in [0.0, 1.0]."""
        if self._target <= 0:
            return 1.0
        return self._elapsed / self._target

    def tick(self, delta: float) -> "PhaseTimer":
        """Advance the timer by ``delta``.

        Args:
            delta: Non-negative time step supplied by the clock

        Returns:
            The timer itself, so ``timer.tick(dt).finished`` reads naturally

        Raises:
            ValueError: If delta is negative
        """
        if delta < 0:
            raise ValueError(f"Clock delta must be non-negative, got {delta}")
        self._elapsed = min(self._elapsed + delta, self._target)
        return self

    def reset(self, new_target: float) -> None:
        """Restart the timer with a new target duration."""
        self._target = float(new_target)
        self._elapsed = 0.0

    def __repr__(self) -> str:
        return f"PhaseTimer(elapsed={self._elapsed:.3f}, target={self._target:.3f})"

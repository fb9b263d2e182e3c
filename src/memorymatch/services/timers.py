from __future__ import annotations

from dataclasses import dataclass

DEFAULT_REVEAL_DELAY = 0.5  # seconds a mismatched/matched pair stays visible before resolving


@dataclass
class RevealTimer:
    """Caller-side timer for the pause between a second pick and its resolution.

    Arm it when the engine enters ``resolving``; feed it frame deltas with
    ``update``. It fires exactly once per arm, so the game is resolved once
    per pending pair no matter how many frames pass.
    """

    delay: float = DEFAULT_REVEAL_DELAY
    _remaining: float | None = None

    @property
    def armed(self) -> bool:
        return self._remaining is not None

    def arm(self) -> None:
        self._remaining = self.delay

    def cancel(self) -> None:
        self._remaining = None

    def update(self, dt: float) -> bool:
        if self._remaining is None:
            return False
        self._remaining -= dt
        if self._remaining > 0:
            return False
        self._remaining = None
        return True


@dataclass
class Stopwatch:
    """Elapsed play time for single-player games."""

    elapsed: float = 0.0
    running: bool = True

    def update(self, dt: float) -> None:
        if self.running:
            self.elapsed += dt

    def stop(self) -> None:
        self.running = False

    def restart(self) -> None:
        self.elapsed = 0.0
        self.running = True

    def format_elapsed(self) -> str:
        total = int(self.elapsed)
        return f"{total // 60}:{total % 60:02d}"

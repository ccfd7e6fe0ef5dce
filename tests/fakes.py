# tests/fakes.py

from __future__ import annotations

from worktravel.storage import MemoryKeyValueStore, StorageError


class FailingStore(MemoryKeyValueStore):
    """
    Store whose writes fail while `failing` is set.

    Reads keep working so the manager can still load.
    """

    def __init__(self, failing: bool = True) -> None:
        super().__init__()
        self.failing = failing
        self.attempts = 0

    def set(self, key: str, value: str) -> None:
        self.attempts += 1
        if self.failing:
            raise StorageError("disk full")
        super().set(key, value)


class RecordingStore(MemoryKeyValueStore):
    """Memory store that keeps every write in order."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: list[tuple[str, str]] = []

    def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        super().set(key, value)


class ScriptedConfirm:
    """Confirm callback answering with a fixed choice; records each prompt."""

    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.prompts: list[tuple[str, str, str, str]] = []

    def __call__(self, title: str, message: str, cancel: str, destructive: str) -> bool:
        self.prompts.append((title, message, cancel, destructive))
        return self.answer


class FrozenClock:
    """time.time() replacement that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 0.001) -> None:
        self.now += seconds

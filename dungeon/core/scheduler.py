"""
Turn scheduler module for the dungeon battler.

The enemy answers a player action after a short "thinking" pause. Instead of
a fire-and-forget timer, the pause is an explicit ScheduledTask: the caller
decides when due tasks run, and a pending task can be cancelled when the game
is restarted in the middle of the delay.
"""

import time
from collections.abc import Callable
from itertools import count

from dungeon.core.logging import get_logger

logger = get_logger(__name__)


class ScheduledTask:
    """
    A callback due at a given time, which can be cancelled until it runs.

    Attributes:
        due (float):
            The clock time at which the task becomes due.
        name (str):
            A short label, used in diagnostics.

    """

    def __init__(self, due: float, callback: Callable[[], None], name: str) -> None:
        self.due = due
        self.name = name
        self._callback = callback
        self._cancelled = False
        self._done = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    @property
    def pending(self) -> bool:
        """Checks if the task will still run."""
        return not (self._cancelled or self._done)

    def cancel(self) -> bool:
        """
        Cancels the task.

        Returns:
            bool:
                True if the task was pending and is now cancelled.

        """
        if not self.pending:
            return False
        self._cancelled = True
        logger.debug("Cancelled task %s", self.name)
        return True

    def run(self) -> None:
        """Runs the callback, once."""
        if not self.pending:
            return
        self._done = True
        self._callback()

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "done" if self._done else "pending"
        return f"{self.__class__.__name__}(name='{self.name}', due={self.due:.3f}, {state})"


class TurnScheduler:
    """
    Single-threaded scheduler of delayed callbacks.

    Tasks run one at a time, in due order (ties in scheduling order), and
    only when the owner calls ``run_pending``: nothing ever runs
    concurrently with the caller.

    Args:
        clock (Callable[[], float]):
            Returns the current time in seconds. Defaults to time.monotonic.
        sleep (Callable[[float], None]):
            Blocks for the given number of seconds. Defaults to time.sleep.

    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._tasks: list[tuple[float, int, ScheduledTask]] = []
        self._sequence = count()

    def schedule(
        self,
        delay: float,
        callback: Callable[[], None],
        name: str = "task",
    ) -> ScheduledTask:
        """
        Schedules a callback to run after the given delay.

        Args:
            delay (float):
                Seconds to wait; negative delays are treated as zero.
            callback (Callable[[], None]):
                The function to call.
            name (str):
                A short label for diagnostics.

        Returns:
            ScheduledTask:
                A handle to cancel the task.

        """
        task = ScheduledTask(self._clock() + max(0.0, delay), callback, name)
        self._tasks.append((task.due, next(self._sequence), task))
        self._tasks.sort(key=lambda entry: entry[:2])
        logger.debug("Scheduled %r", task)
        return task

    def has_pending(self) -> bool:
        """Checks if any task is still waiting to run."""
        self._discard_finished()
        return bool(self._tasks)

    def run_pending(self, block: bool = True) -> int:
        """
        Runs every task that is due.

        Args:
            block (bool):
                If True, sleep until each pending task becomes due and run
                them all. If False, only run tasks already due.

        Returns:
            int:
                The number of tasks that ran.

        """
        executed = 0
        while self.has_pending():
            _, _, task = self._tasks[0]
            wait = task.due - self._clock()
            if wait > 0:
                if not block:
                    break
                self._sleep(wait)
            self._tasks.pop(0)
            task.run()
            executed += 1
        return executed

    def cancel_all(self) -> int:
        """
        Cancels every pending task.

        Returns:
            int:
                The number of tasks cancelled.

        """
        cancelled = sum(1 for _, _, task in self._tasks if task.cancel())
        self._tasks.clear()
        return cancelled

    def _discard_finished(self) -> None:
        self._tasks = [entry for entry in self._tasks if entry[2].pending]

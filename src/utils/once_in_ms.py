"""
Timing utility for throttling execution in frame loops
"""

import time


class OnceInMs:
    """
    Timer for throttling code execution to at most once per interval.

    Use this to limit how often expensive operations run in the frame loop,
    even though the loop itself runs every frame (e.g., 20ms).

    Example:
        # Before the loop:
        stats_timer = OnceInMs(60000)  # Once per minute

        # In the frame loop:
        if stats_timer.should_execute():
            log_stats()  # Only executes once per minute
    """

    def __init__(self, interval_ms: int, clock=time.monotonic):
        """
        Initialize timer with interval.

        Args:
            interval_ms: Minimum milliseconds between executions
            clock: Time source in seconds (injectable for tests)
        """
        self.interval_ms = interval_ms
        self.interval = interval_ms / 1000.0
        self._clock = clock
        self.last_execution = self._clock()

    def should_execute(self) -> bool:
        """
        Check if enough time has passed and update timer if so.

        Returns:
            True if interval has passed (and timer is updated), False otherwise
        """
        current = self._clock()
        if current - self.last_execution >= self.interval:
            self.last_execution = current
            return True
        return False

    def elapsed_ms(self) -> float:
        """Get milliseconds elapsed since last execution"""
        return (self._clock() - self.last_execution) * 1000

import time


class MillisecondClock:
    """
    Wall clock in epoch milliseconds that never repeats or goes backwards.

    The engine drops any sample that isn't newer than the last one, so two readings
    inside the same millisecond (or a clock step backwards from NTP) would lose data.
    We nudge the timestamp forward by 1 ms instead.
    """

    def __init__(self):
        self.last_timestamp = None

    def now_ms(self):
        now = int(time.time() * 1000)
        if self.last_timestamp is not None and now <= self.last_timestamp:
            now = self.last_timestamp + 1
        self.last_timestamp = now
        return now

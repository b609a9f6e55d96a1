import logging
import math

import numpy as np

from heatmap_engine import constants

logger = logging.getLogger(__name__)


class VerticalTracker:
    """
    Dead reckoning of the car's vertical travel, turned into a floor number.

    Vertical acceleration is integrated into a leaky velocity, and the velocity into a
    displacement measured from the last floor we committed to.  A floor change is only
    committed once the displacement has been past one floor height, in the same
    direction, for the whole hysteresis window.  A spike that pokes over the threshold
    and comes back doesn't move us.
    """

    def __init__(self, configuration):
        self.floor_height = configuration.floor_height
        self.hysteresis_window = configuration.hysteresis_window
        self.noise_floor = configuration.vertical_noise_floor
        self.gravity_offset = configuration.gravity_offset
        self.velocity_time_constant = configuration.velocity_time_constant
        self.max_sample_gap = configuration.max_sample_gap
        self.min_floor = configuration.min_floor
        self.max_floor = configuration.max_floor
        self.reset()

    def reset(self):
        # Floor 0 is wherever the session started, there's no absolute reference.
        self.current_floor = 0
        self.last_commit_at = None
        self.velocity = 0.0  # Units of m/s
        self.displacement = 0.0  # Units of meters, relative to current_floor
        self.last_timestamp = None
        self.pending_direction = 0
        self.pending_since = None

    def update(self, z, timestamp):
        """
        Integrate one vertical acceleration reading.
        :param z: vertical acceleration in g
        :param timestamp: milliseconds, strictly after the previous call
        :return: the floor change committed by this sample: -1, 0 or +1
        """
        if self.last_timestamp is None:
            # Nothing to integrate against yet.
            self.last_timestamp = timestamp
            return 0

        elapsed_ms = timestamp - self.last_timestamp
        self.last_timestamp = timestamp
        if elapsed_ms > self.max_sample_gap:
            # We don't know what happened during the gap, start the integration over.
            logger.debug(
                "Gap of {0} ms in vertical data, restarting integration".format(
                    elapsed_ms
                )
            )
            self.velocity = 0.0
            return self._check_for_commit(timestamp)

        dt = elapsed_ms / 1000.0
        accel = z - self.gravity_offset
        if abs(accel) < self.noise_floor:
            accel = 0.0
        accel *= constants.STANDARD_GRAVITY

        previous_velocity = self.velocity
        decay = math.exp(-dt / self.velocity_time_constant)
        self.velocity = previous_velocity * decay + accel * dt
        # Trapezoid rule, the samples are too far apart for anything cruder.
        self.displacement += (previous_velocity + self.velocity) / 2.0 * dt

        return self._check_for_commit(timestamp)

    def _check_for_commit(self, timestamp):
        if abs(self.displacement) < self.floor_height:
            self._clear_pending()
            return 0

        direction = int(np.sign(self.displacement))
        if not self._floor_in_shaft(self.current_floor + direction):
            # Already at the configured end of the shaft, so hold the displacement at the
            # threshold instead of letting it run away.
            self.displacement = direction * self.floor_height
            self.velocity = 0.0
            self._clear_pending()
            return 0

        if direction != self.pending_direction:
            self.pending_direction = direction
            self.pending_since = timestamp
        if timestamp - self.pending_since < self.hysteresis_window:
            return 0

        self.current_floor += direction
        self.last_commit_at = timestamp
        # Keep the remainder so a fast, long trip can commit several floors in a row.
        self.displacement -= direction * self.floor_height
        logger.info(
            "Committed floor {0} at {1}, carrying over {2:.3f} m".format(
                self.current_floor, timestamp, self.displacement
            )
        )
        if abs(self.displacement) >= self.floor_height:
            # The next floor has to hold for its own window.
            self.pending_since = timestamp
        else:
            self._clear_pending()
        return direction

    def _clear_pending(self):
        self.pending_direction = 0
        self.pending_since = None

    def _floor_in_shaft(self, floor):
        if self.min_floor is not None and floor < self.min_floor:
            return False
        if self.max_floor is not None and floor > self.max_floor:
            return False
        return True

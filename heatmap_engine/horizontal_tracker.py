import logging
import math

import numpy as np

from heatmap_engine import constants

logger = logging.getLogger(__name__)


class HorizontalTracker:
    """
    Where in the car footprint the motion is happening, plus how vigorous it is.

    Position comes from leaky double integration of the lateral (x, y) acceleration.
    The position also relaxes toward the middle of the car, and the reported
    coordinates go through a tanh so they bend toward the walls instead of piling up
    exactly on them.  Intensity only looks at the current sample.
    """

    def __init__(self, configuration):
        self.half_extent = np.array(
            [configuration.car_width / 2.0, configuration.car_depth / 2.0]
        )
        self.noise_floor = configuration.horizontal_noise_floor
        self.calibration_max = configuration.calibration_max
        self.velocity_time_constant = configuration.velocity_time_constant
        self.position_time_constant = configuration.position_time_constant
        self.max_sample_gap = configuration.max_sample_gap
        self.reset()

    def reset(self):
        # Relative to the centre of the car, units of m/s and meters.
        self.velocity = np.zeros(2)
        self.position = np.zeros(2)
        self.last_timestamp = None

    def update(self, x, y, z, timestamp):
        """
        :return: (normalized_x, normalized_y, intensity), each within [0, 1]
        """
        if self.last_timestamp is not None:
            elapsed_ms = timestamp - self.last_timestamp
            if elapsed_ms > self.max_sample_gap:
                logger.debug(
                    "Gap of {0} ms in horizontal data, dropping velocity".format(
                        elapsed_ms
                    )
                )
                self.velocity = np.zeros(2)
            else:
                self._integrate(x, y, elapsed_ms / 1000.0)
        self.last_timestamp = timestamp

        normalized = 0.5 + 0.5 * np.tanh(self.position / self.half_extent)
        # tanh already keeps us inside, this only guards against rounding.
        normalized = np.clip(normalized, 0.0, 1.0)
        return float(normalized[0]), float(normalized[1]), self.intensity(x, y, z)

    def intensity(self, x, y, z):
        magnitude = float(np.linalg.norm([x, y, z]))
        return min(1.0, magnitude / self.calibration_max)

    def _integrate(self, x, y, dt):
        accel = np.array([x, y], dtype=float)
        accel[np.abs(accel) < self.noise_floor] = 0.0
        accel *= constants.STANDARD_GRAVITY

        previous_velocity = self.velocity
        self.velocity = (
            previous_velocity * math.exp(-dt / self.velocity_time_constant) + accel * dt
        )
        self.position = (
            self.position * math.exp(-dt / self.position_time_constant)
            + (previous_velocity + self.velocity) / 2.0 * dt
        )

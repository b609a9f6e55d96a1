import json
import logging
import math
from collections import namedtuple
from pathlib import Path

import pytz

from heatmap_engine import constants

logger = logging.getLogger(__name__)


class InvalidConfigurationException(ValueError):
    pass


_CONFIG_FIELDS = [
    ("floor_height", constants.CONFIG_FLOOR_HEIGHT, constants.DEFAULT_FLOOR_HEIGHT),
    ("car_width", constants.CONFIG_CAR_WIDTH, constants.DEFAULT_CAR_WIDTH),
    ("car_depth", constants.CONFIG_CAR_DEPTH, constants.DEFAULT_CAR_DEPTH),
    ("hysteresis_window", constants.CONFIG_HYSTERESIS_WINDOW, constants.DEFAULT_HYSTERESIS_WINDOW),
    ("calibration_max", constants.CONFIG_CALIBRATION_MAX, constants.DEFAULT_CALIBRATION_MAX),
    ("sample_interval", constants.CONFIG_SAMPLE_INTERVAL, constants.DEFAULT_SAMPLE_INTERVAL),
    ("max_sample_gap", constants.CONFIG_MAX_SAMPLE_GAP, constants.DEFAULT_MAX_SAMPLE_GAP),
    ("velocity_time_constant", constants.CONFIG_VELOCITY_TIME_CONSTANT,
     constants.DEFAULT_VELOCITY_TIME_CONSTANT),
    ("position_time_constant", constants.CONFIG_POSITION_TIME_CONSTANT,
     constants.DEFAULT_POSITION_TIME_CONSTANT),
    ("vertical_noise_floor", constants.CONFIG_VERTICAL_NOISE_FLOOR,
     constants.DEFAULT_VERTICAL_NOISE_FLOOR),
    ("horizontal_noise_floor", constants.CONFIG_HORIZONTAL_NOISE_FLOOR,
     constants.DEFAULT_HORIZONTAL_NOISE_FLOOR),
    ("gravity_offset", constants.CONFIG_GRAVITY_OFFSET, constants.DEFAULT_GRAVITY_OFFSET),
    ("max_abs_acceleration", constants.CONFIG_MAX_ABS_ACCELERATION,
     constants.DEFAULT_MAX_ABS_ACCELERATION),
    ("min_floor", constants.CONFIG_MIN_FLOOR, None),
    ("max_floor", constants.CONFIG_MAX_FLOOR, None),
    ("ground_floor_name", constants.CONFIG_GROUND_FLOOR_NAME, None),
    ("floor_names", constants.CONFIG_FLOOR_NAMES, None),
    ("timezone", constants.CONFIG_TIMEZONE, constants.DEFAULT_TIMEZONE),
]

# These have to be strictly positive or the engine can't do anything sensible.
_POSITIVE_FIELDS = (
    "floor_height",
    "car_width",
    "car_depth",
    "calibration_max",
    "sample_interval",
    "max_sample_gap",
    "velocity_time_constant",
    "position_time_constant",
    "max_abs_acceleration",
)

_NON_NEGATIVE_FIELDS = (
    "hysteresis_window",
    "vertical_noise_floor",
    "horizontal_noise_floor",
)


class EngineConfiguration(
    namedtuple(
        "EngineConfiguration",
        [name for name, _, _ in _CONFIG_FIELDS],
        defaults=[default for _, _, default in _CONFIG_FIELDS],
    )
):
    __slots__ = ()

    @classmethod
    def from_dict(cls, config):
        """
        Build a configuration from the JSON style (camelCase) keys of the config file.
        Keys we don't know about are ignored, missing keys get the defaults.
        """
        values = {}
        for name, key, _ in _CONFIG_FIELDS:
            if key in config:
                values[name] = config[key]
        if values.get("floor_names") is not None:
            # JSON object keys are always strings, floors are integers.
            try:
                values["floor_names"] = {
                    int(floor): str(label)
                    for floor, label in values["floor_names"].items()
                }
            except (AttributeError, TypeError, ValueError):
                raise InvalidConfigurationException(
                    "{0} must map floor numbers to names".format(
                        constants.CONFIG_FLOOR_NAMES
                    )
                )
        return cls(**values)

    def validate(self):
        """
        Check the configuration once, before recording starts.
        :return: self, so this can be chained
        :raises InvalidConfigurationException: on any unusable value
        """
        for name in _POSITIVE_FIELDS:
            value = self._number(name)
            if not value > 0:
                raise InvalidConfigurationException(
                    "{0} must be greater than zero, got {1}".format(name, value)
                )
        for name in _NON_NEGATIVE_FIELDS:
            value = self._number(name)
            if value < 0:
                raise InvalidConfigurationException(
                    "{0} can't be negative, got {1}".format(name, value)
                )
        self._number("gravity_offset")

        # The session always starts at floor 0, so the bounds have to include it.
        if self.min_floor is not None and (
            not isinstance(self.min_floor, int) or self.min_floor > 0
        ):
            raise InvalidConfigurationException(
                "min_floor must be an integer <= 0, got {0}".format(self.min_floor)
            )
        if self.max_floor is not None and (
            not isinstance(self.max_floor, int) or self.max_floor < 0
        ):
            raise InvalidConfigurationException(
                "max_floor must be an integer >= 0, got {0}".format(self.max_floor)
            )

        try:
            pytz.timezone(self.timezone)
        except pytz.UnknownTimeZoneError:
            raise InvalidConfigurationException(
                "Unknown timezone {0}".format(self.timezone)
            )
        return self

    def _number(self, name):
        value = getattr(self, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidConfigurationException(
                "{0} must be a number, got {1!r}".format(name, value)
            )
        try:
            finite = math.isfinite(value)
        except OverflowError:
            finite = False
        if not finite:
            raise InvalidConfigurationException(
                "{0} must be finite, got {1!r}".format(name, value)
            )
        return value


class HeatmapConfiguration:
    @staticmethod
    def get_config_data(config_file_name=None):
        config_file_path = Path(config_file_name or constants.CONFIG_FILE_NAME)
        if config_file_path.is_file():
            with open(str(config_file_path)) as config_file:
                return json.load(config_file)
        return {}

    @staticmethod
    def get_engine_configuration(config_file_name=None, logger=logger):
        """
        Read the engine configuration from the JSON config file.  A missing or unreadable
        file gives the defaults; bad values are left for validate() to reject.
        """
        try:
            config = HeatmapConfiguration.get_config_data(config_file_name)
        except (OSError, ValueError) as e:
            logger.exception(
                "Problems reading the heat map configuration, using defaults, {0}".format(
                    str(e)
                )
            )
            config = {}
        if not isinstance(config, dict):
            logger.error("Heat map configuration is not a JSON object, using defaults")
            config = {}
        return EngineConfiguration.from_dict(config)

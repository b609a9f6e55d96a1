from heatmap_engine import constants


class FloorNamer:
    """
    Maps a floor index (0 is where the session started) to the label people see.
    Explicit overrides win, then the ground floor label, then the numbered format.
    """

    def __init__(self, ground_floor_name=None, floor_names=None,
                 name_format=constants.DEFAULT_FLOOR_NAME_FORMAT):
        self.ground_floor_name = ground_floor_name
        self.floor_names = dict(floor_names or {})
        self.name_format = name_format

    @classmethod
    def from_configuration(cls, configuration):
        return cls(
            ground_floor_name=configuration.ground_floor_name,
            floor_names=configuration.floor_names,
        )

    def __call__(self, floor_index):
        if floor_index in self.floor_names:
            return self.floor_names[floor_index]
        if floor_index == 0 and self.ground_floor_name:
            return self.ground_floor_name
        return self.name_format.format(floor_index)

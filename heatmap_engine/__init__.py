from heatmap_engine.configuration import EngineConfiguration, InvalidConfigurationException
from heatmap_engine.engine import HeatmapEngine, SampleStatus
from heatmap_engine.floor_names import FloorNamer

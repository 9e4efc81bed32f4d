from reststeps.infrastructure.scenario.base_loader import ScenarioLoadError, ScenarioLoaderBase
from reststeps.infrastructure.scenario.file_finder import ScenarioFileFinder
from reststeps.infrastructure.scenario.json_loader import JsonScenarioLoader
from reststeps.infrastructure.scenario.loader_registry import ScenarioLoaderRegistry
from reststeps.infrastructure.scenario.yaml_loader import YamlScenarioLoader

__all__ = [
    "ScenarioLoadError",
    "ScenarioLoaderBase",
    "ScenarioFileFinder",
    "ScenarioLoaderRegistry",
    "YamlScenarioLoader",
    "JsonScenarioLoader",
]

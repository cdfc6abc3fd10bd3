"""scenarios — versioned storage of saved salary-comparison inputs."""
from inhand.scenarios.schemas import ScenarioConfiguration, ScenarioDraft, ScenarioVersion
from inhand.scenarios.store import InMemoryScenarioStore, ScenarioStore

__all__ = [
    "InMemoryScenarioStore",
    "ScenarioConfiguration",
    "ScenarioDraft",
    "ScenarioStore",
    "ScenarioVersion",
]

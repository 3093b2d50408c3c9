import yaml
from pathlib import Path
from typing import Any, Dict, Optional

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "farmland_linkage.yml"


class LinkageConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.matching = data.get("matching", {}) or {}
        self.scoring = data.get("scoring", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.debug = data.get("debug", False)

    def matching_options(self):
        """Build MatchingOptions from the ``matching`` section."""
        from farmland_linkage.matching.flexible import MatchingOptions
        return MatchingOptions.from_mapping(self.matching)

    def scoring_policy(self):
        """Build the ScoringPolicy from the ``scoring`` section."""
        from farmland_linkage.matching.flexible import ScoringPolicy
        return ScoringPolicy.from_mapping(self.scoring)


def load_config(path: Optional[Path] = None) -> 'LinkageConfig':
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
    else:
        path = CONFIG_PATH
        if not path.exists():
            return LinkageConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}

    return LinkageConfig(data)

_config_cache = None

def get_config() -> 'LinkageConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config_cache() -> None:
    global _config_cache
    _config_cache = None

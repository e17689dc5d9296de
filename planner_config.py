"""
planner_config.py

Runtime configuration for the stack-world planner.

Defaults come from common.constants; a YAML file can override them. The
file layout mirrors the PlannerConfig fields under a ``planner`` section:

    planner:
      expansion_budget: 50000
      displacement_cost: 4
      heuristic_cache_size: 8192
      already_true_message: "The interpretation is already true!"
      error_separator: " ; "
    logging:
      level: INFO

Usage:
    from planner_config import get_config, load_config

    config = load_config("config/planner.yaml")
    planner = Planner(world, config=config)
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from common.constants import (
    ALREADY_TRUE_MESSAGE,
    DEFAULT_DISPLACEMENT_COST,
    DEFAULT_EXPANSION_BUDGET,
    DEFAULT_HEURISTIC_CACHE_SIZE,
    ERROR_SEPARATOR,
)
from component_8_logging_config import get_logger
from planner_exceptions import InvalidConfigError, wrap_exception

logger = get_logger(__name__)


@dataclass
class PlannerConfig:
    """
    Planner settings.

    Attributes:
        expansion_budget: Maximum node expansions per interpretation
        displacement_cost: Heuristic cost per object that must be moved away (>= 1)
        heuristic_cache_size: Maximum memoized estimates per compiled goal
        already_true_message: Placeholder plan for goals that already hold
        error_separator: Separator for the aggregated error message
        log_level: Console log level name used by main()
    """

    expansion_budget: int = DEFAULT_EXPANSION_BUDGET
    displacement_cost: int = DEFAULT_DISPLACEMENT_COST
    heuristic_cache_size: int = DEFAULT_HEURISTIC_CACHE_SIZE
    already_true_message: str = ALREADY_TRUE_MESSAGE
    error_separator: str = ERROR_SEPARATOR
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate value ranges."""
        if self.expansion_budget <= 0:
            raise InvalidConfigError(
                f"expansion_budget must be positive, got {self.expansion_budget}"
            )
        if self.displacement_cost < 1:
            raise InvalidConfigError(
                f"displacement_cost must be >= 1, got {self.displacement_cost}"
            )
        if self.heuristic_cache_size <= 0:
            raise InvalidConfigError(
                f"heuristic_cache_size must be positive, got {self.heuristic_cache_size}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlannerConfig":
        """
        Build a config from a parsed YAML mapping.

        Unknown keys are ignored with a warning.
        """
        if not isinstance(data, dict):
            raise InvalidConfigError(
                f"Config must be a mapping, got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}

        for key, value in (data.get("planner") or {}).items():
            if key in known:
                values[key] = value
            else:
                logger.warning(f"Unknown planner setting in config: {key}")

        log_section = data.get("logging") or {}
        if "level" in log_section:
            values["log_level"] = str(log_section["level"]).upper()

        try:
            return cls(**values)
        except TypeError as e:
            raise wrap_exception(e, InvalidConfigError, "Malformed planner config")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_path: Union[str, Path]) -> PlannerConfig:
    """
    Load configuration from a YAML file.

    A missing file is not an error: defaults are returned and a warning is
    logged.

    Args:
        config_path: Path to the YAML config file

    Returns:
        PlannerConfig

    Raises:
        InvalidConfigError: If the file is not valid YAML or holds invalid values
    """
    config_file = Path(config_path)
    if not config_file.exists():
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return PlannerConfig()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise wrap_exception(
            e, InvalidConfigError, "Config file is not valid YAML", path=str(config_path)
        )

    config = PlannerConfig.from_dict(data or {})
    logger.info(f"[OK] Configuration loaded from {config_path}")
    return config


_config: Optional[PlannerConfig] = None


def get_config() -> PlannerConfig:
    """Return the process-wide config, creating defaults on first use."""
    global _config
    if _config is None:
        _config = PlannerConfig()
    return _config


def set_config(config: PlannerConfig) -> None:
    """Replace the process-wide config."""
    global _config
    _config = config


def reset_config() -> None:
    """Forget the process-wide config (next get_config() returns defaults)."""
    global _config
    _config = None

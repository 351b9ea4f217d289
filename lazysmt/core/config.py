import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from lazysmt.core.errors import ConfigError

logger = logging.getLogger(__name__)

POLICIES = ("naive", "minimal")

class SolverConfig(BaseModel):
    """Configuration for a lazy SMT solving session."""
    sat_solver: str = "g3"  # Glucose 3, shipped with every pysat build
    policy: str = "minimal"
    minimize_explanations: bool = True
    max_iterations: Optional[int] = Field(default=None, ge=1)
    theory_timeout_ms: Optional[int] = Field(default=None, ge=1)

    @field_validator("policy")
    @classmethod
    def validate_policy(cls, v: str) -> str:
        v = v.lower()
        if v not in POLICIES:
            raise ValueError(f"policy must be one of {POLICIES}, got '{v}'")
        return v

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "SolverConfig":
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid solver configuration: {e}") from e

    @staticmethod
    def from_env_or_file() -> "SolverConfig":
        # 1. Env vars
        overrides: Dict[str, Any] = {}
        if os.environ.get("LAZYSMT_SAT_SOLVER"):
            overrides["sat_solver"] = os.environ["LAZYSMT_SAT_SOLVER"]
        if os.environ.get("LAZYSMT_POLICY"):
            overrides["policy"] = os.environ["LAZYSMT_POLICY"]
        if os.environ.get("LAZYSMT_MAX_ITERATIONS"):
            overrides["max_iterations"] = os.environ["LAZYSMT_MAX_ITERATIONS"]
        if overrides:
            return SolverConfig.from_mapping(overrides)

        # 2. Config path
        config_path = os.environ.get("LAZYSMT_CONFIG_PATH")
        if config_path and os.path.exists(config_path):
            try:
                with open(config_path, "r") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
            else:
                if not isinstance(data, dict):
                    raise ConfigError(f"Config file {config_path} must hold a JSON object")
                return SolverConfig.from_mapping(data)

        # Default
        return SolverConfig()

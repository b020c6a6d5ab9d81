"""Configuration schema and loading for foil plans.

This package provides JSON-based configuration loading and validation. It
includes pydantic models for schema validation, a loader with readable
error messages, adapters to domain objects and placement checks.

Public API:
    - FoilPlanConfiguration: Root configuration model
    - PoolConfig, StairsConfig, SplashPoolConfig: Pool and sub-features
    - MaterialConfig, PlanningConfig: Material and planning parameters
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - ValidationResult: Container for validation results
    - validate_config: Perform full configuration validation
    - config_to_*: Convert configuration to domain objects

Example:
    >>> from pathlib import Path
    >>> from poolfoil.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("pool.json"))
    ...     print(f"Pool: {config.pool.length}x{config.pool.width}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from poolfoil.application.config.adapter import (
    config_to_material,
    config_to_packing,
    config_to_plan_inputs,
    config_to_pool,
    config_to_settings,
    config_to_splash_pool,
    config_to_stairs,
)
from poolfoil.application.config.loader import (
    SECTION_LABELS,
    ConfigError,
    config_path,
    field_label,
    load_config,
    load_config_from_dict,
)
from poolfoil.application.config.schema import (
    SUPPORTED_VERSIONS,
    FoilPlanConfiguration,
    MaterialConfig,
    PlanningConfig,
    PointConfig,
    PoolConfig,
    SplashPoolConfig,
    StairsConfig,
)
from poolfoil.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    describe_config,
    validate_config,
)

__all__ = [
    # Schema
    "SUPPORTED_VERSIONS",
    "FoilPlanConfiguration",
    "MaterialConfig",
    "PlanningConfig",
    "PointConfig",
    "PoolConfig",
    "SplashPoolConfig",
    "StairsConfig",
    # Loader
    "SECTION_LABELS",
    "ConfigError",
    "config_path",
    "field_label",
    "load_config",
    "load_config_from_dict",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "describe_config",
    "validate_config",
    # Adapters
    "config_to_material",
    "config_to_packing",
    "config_to_plan_inputs",
    "config_to_pool",
    "config_to_settings",
    "config_to_splash_pool",
    "config_to_stairs",
]

"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates that all required fields are present.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    required_sections = ["global", "matching"]
    for section in required_sections:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    if "global" in config:
        log_level = str((config["global"] or {}).get("log_level", "INFO")).upper()
        if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            issues.append(f"Unknown global.log_level: {log_level}")

    if "matching" in config:
        matching = config["matching"] or {}
        min_score = matching.get("min_score", 0.6)
        if not isinstance(min_score, (int, float)) or not 0 <= min_score <= 1:
            issues.append(f"matching.min_score must be in [0, 1], got {min_score}")

        top_k = matching.get("top_k")
        if top_k is not None and (not isinstance(top_k, int) or top_k < 1):
            issues.append(f"matching.top_k must be a positive integer, got {top_k}")

    if "questionnaire" in config:
        path = (config["questionnaire"] or {}).get("path")
        if path and not Path(path).exists():
            issues.append(f"questionnaire.path does not exist: {path}")

    if "evaluation" in config:
        quantiles = (config["evaluation"] or {}).get("quantiles", [])
        bad = [q for q in quantiles if not isinstance(q, (int, float)) or not 0 <= q <= 1]
        if bad:
            issues.append(f"evaluation.quantiles must be in [0, 1], got {bad}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "matching.min_score")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value

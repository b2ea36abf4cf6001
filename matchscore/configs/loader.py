"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates the scoring section before an engine is built from it.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)

WEIGHT_NAMES = ("mbti", "interests", "love_language", "personality", "location")


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

    if not config.get("scoring"):
        issues.append("Missing section: scoring (defaults will be used)")
        return issues

    scoring = config["scoring"]

    # Check weights cover every factor and sum to 1
    if scoring.get("weights"):
        weights = scoring["weights"]
        for name in WEIGHT_NAMES:
            if name not in weights:
                issues.append(f"Missing scoring.weights.{name}")
        unknown = set(weights) - set(WEIGHT_NAMES)
        if unknown:
            issues.append(f"Unknown weights: {sorted(unknown)}")
        total = sum(weights.values())
        if abs(total - 1.0) > 1e-9:
            issues.append(f"Scoring weights don't sum to 1: {total}")

    mbti = scoring.get("mbti") or {}
    strategy = mbti.get("strategy", "matrix")
    if strategy not in ("matrix", "letter_overlap"):
        issues.append(f"Unknown mbti.strategy: {strategy}")
    for level, value in (mbti.get("level_scores") or {}).items():
        if not 0 < value <= 1:
            issues.append(f"mbti.level_scores.{level} must be in (0, 1], got {value}")

    neutral = scoring.get("neutral_score", 0.5)
    if not 0 <= neutral <= 1:
        issues.append(f"neutral_score must be in [0, 1], got {neutral}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.weights.personality")
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

"""Configuration loader for match thresholds"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from catalog_matcher.models.configs import MatcherConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/matcher_config.yaml")

# Environment variable -> (thresholds field, type)
ENV_OVERRIDES = {
    "MATCH_OK_THRESHOLD": ("ok_threshold", float),
    "MATCH_REVIEW_THRESHOLD": ("review_threshold", float),
    "MATCH_GAP_THRESHOLD": ("gap_threshold", float),
    "MATCH_SCAN_CAP": ("scan_cap", int),
    "MATCH_CANDIDATE_LIMIT": ("candidate_limit", int),
    "MATCH_MISSING_QTY_CONFIDENCE_CAP": ("missing_qty_confidence_cap", float),
    "MATCH_MIN_VALID_QTY": ("min_valid_qty", float),
}


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_name, (field_name, cast) in ENV_OVERRIDES.items():
        raw = environ.get(env_name, "").strip()
        if not raw:
            continue
        try:
            overrides[field_name] = cast(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not a valid %s", env_name, raw, cast.__name__)
    return overrides


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> MatcherConfig:
    """
    Load matcher configuration from YAML file and environment.

    Values from the environment (and a local .env file) override the file.

    Args:
        config_path: Path to configuration file. If None, uses the default
            path when it exists and built-in defaults otherwise.
        environ: Environment mapping. If None, uses os.environ after load_dotenv().

    Returns:
        MatcherConfig object

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist
        ValueError: If config is invalid
    """
    config_data: Dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
    elif DEFAULT_CONFIG_PATH.exists():
        config_path = DEFAULT_CONFIG_PATH

    if config_path is not None:
        # Load YAML
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration must be a mapping: {config_path}")

    if environ is None:
        load_dotenv()
        environ = os.environ

    thresholds = dict(config_data.get("thresholds") or {})
    thresholds.update(_env_overrides(environ))

    # Validate and create MatcherConfig
    return MatcherConfig(**{**config_data, "thresholds": thresholds})


def format_config(config: MatcherConfig) -> str:
    """
    Format MatcherConfig as a YAML string.

    Args:
        config: MatcherConfig object
    Returns:
        YAML string representation
    """
    return yaml.safe_dump(config.model_dump(), sort_keys=False, allow_unicode=True)

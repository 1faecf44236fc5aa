"""Configuration module."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses the packaged settings.yaml

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        config_dir = Path(__file__).parent
        config_path = config_dir / "settings.yaml"

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    for section in ("locale", "description", "images", "template", "logging"):
        config.setdefault(section, {})

    # Override with environment variables if present
    if "PDP_LOCALE" in os.environ:
        config["locale"]["default"] = os.environ["PDP_LOCALE"]

    if "PDP_IMAGE_ROLE" in os.environ:
        config["images"]["role"] = os.environ["PDP_IMAGE_ROLE"]

    if "TEMPLATE_TIMEOUT" in os.environ:
        config["template"]["timeout"] = float(os.environ["TEMPLATE_TIMEOUT"])

    if "LOG_LEVEL" in os.environ:
        config["logging"]["level"] = os.environ["LOG_LEVEL"]

    if "LOG_FORMAT" in os.environ:
        config["logging"]["format"] = os.environ["LOG_FORMAT"]

    return config

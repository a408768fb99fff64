"""
Platform catalog loader.

Loads the supported platforms from platforms.yaml and provides
lookup helpers used by key validation and credential resolution.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

CATALOG_FILE = Path(__file__).resolve().parent.parent / "platforms.yaml"


@lru_cache(maxsize=1)
def _load_catalog() -> tuple[dict[str, Any], ...]:
    if not CATALOG_FILE.exists():
        raise FileNotFoundError(
            f"platforms.yaml not found. Ensure file exists at {CATALOG_FILE}"
        )

    try:
        with open(CATALOG_FILE) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML format in platforms.yaml: {e}")

    if not data or "platforms" not in data:
        raise ValueError("platforms.yaml must contain a 'platforms' key")

    return tuple(data["platforms"])


def list_platforms() -> list[str]:
    """
    Returns list of supported platform names.

    Returns:
        List of names (e.g., ["openai", "gemini", "veo", "kling", "seedream"])
    """
    return [platform["name"] for platform in _load_catalog()]


def load_platform(name: str) -> dict[str, Any]:
    """
    Load a platform entry by name.

    Raises:
        ValueError: If the platform is unknown
    """
    if not name or not isinstance(name, str):
        raise ValueError("platform name must be a non-empty string")

    for platform in _load_catalog():
        if platform.get("name") == name:
            return dict(platform)

    raise ValueError(
        f"Unknown platform '{name}'. Available platforms: {', '.join(list_platforms())}"
    )


def env_key_for(name: str) -> str:
    """Environment variable used as the credential fallback for a platform."""
    return load_platform(name)["envKey"]

# src/scrivener/core/env.py
"""Environment configuration utilities."""

from __future__ import annotations

from dotenv import load_dotenv

from ..config import ScrivenerConfig, config


def load_env(reload_config: bool = False) -> ScrivenerConfig:
    """Load environment variables from a local ``.env`` file.

    With ``reload_config`` the global configuration is refreshed in place from
    the updated environment, so every module holding ``config`` sees the new
    values.
    """
    load_dotenv()
    if reload_config:
        fresh = ScrivenerConfig.load()
        for section in ScrivenerConfig.model_fields:
            setattr(config, section, getattr(fresh, section))
    return config


def get_config() -> ScrivenerConfig:
    """Get the global configuration instance."""
    return config


__all__ = ["load_env", "get_config"]

"""
Configuration Loader - Board Config Files and Profiles.

A board config is one YAML file. Profiles live in a ``profiles``
directory next to it and override individual settings:

    config/
        default.yaml
        profiles/
            development.yaml
            production.yaml

A profile section is merged key by key into the base section; lists
(the stage layout) are replaced whole, so a profile that changes the
layout must list every stage.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from evaluation_board.config.models import BoardConfig

logger = logging.getLogger(__name__)

PROFILE_DIRNAME = "profiles"


def merge_sections(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay one config mapping on another; nested mappings merge, anything else replaces."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = merge_sections(current, value)
        merged[key] = value
    return merged


class ConfigLoader:
    """Reads a board config file, optionally with a profile on top."""

    def __init__(self, profiles_dir: Optional[Union[str, Path]] = None) -> None:
        """
        Args:
            profiles_dir: Where profile files live; defaults to the
                ``profiles`` directory beside each loaded config file
        """
        self._profiles_dir = Path(profiles_dir) if profiles_dir is not None else None

    def load(
        self,
        config_path: Union[str, Path],
        profile: Optional[str] = None,
    ) -> BoardConfig:
        """
        Load and validate a board config.

        Args:
            config_path: YAML file with the base settings
            profile: Profile name merged over the base settings

        Raises:
            FileNotFoundError: If the config or the profile is missing
            ValueError: If a file does not hold a YAML mapping
            pydantic.ValidationError: If the merged settings are invalid,
                including duplicate stage ids or orders in the layout
        """
        path = Path(config_path)
        settings = self.read(path)

        if profile:
            settings = merge_sections(settings, self.read_profile(path, profile))

        config = BoardConfig.model_validate(settings)
        logger.info(
            f"Loaded board config {path.name}"
            f"{f' (profile {profile})' if profile else ''}: "
            f"{len(config.layout.stages)} stages"
        )
        return config

    def profile_path(self, config_path: Union[str, Path], profile: str) -> Path:
        directory = self._profiles_dir or Path(config_path).parent / PROFILE_DIRNAME
        return directory / f"{profile}.yaml"

    def available_profiles(self, config_path: Union[str, Path]) -> List[str]:
        """Profile names that can be passed to load for this config file."""
        directory = self.profile_path(config_path, "_").parent
        if not directory.is_dir():
            return []
        return sorted(p.stem for p in directory.glob("*.yaml"))

    def read_profile(self, config_path: Path, profile: str) -> Dict[str, Any]:
        path = self.profile_path(config_path, profile)
        if not path.exists():
            raise FileNotFoundError(f"Profile not found: {profile} ({path})")
        return self.read(path)

    @staticmethod
    def read(path: Path) -> Dict[str, Any]:
        """Parse one YAML file; an empty file yields no settings."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping of settings")
        return data


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
) -> BoardConfig:
    """Load a board config with profiles looked up beside the file."""
    return ConfigLoader().load(config_path, profile)

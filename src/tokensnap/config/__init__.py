# topmark:header:start
#
#   project      : TokenSnap
#   file         : __init__.py
#   file_relpath : src/tokensnap/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for TokenSnap: ambient settings, project config and logging."""

from __future__ import annotations

from tokensnap.config.io import ProjectConfig, apply_project_config, load_project_config
from tokensnap.config.settings import (
    Settings,
    SettingsFrame,
    current_settings,
    get_base_settings,
    set_base_settings,
    settings_scope,
)

__all__ = [
    "ProjectConfig",
    "Settings",
    "SettingsFrame",
    "apply_project_config",
    "current_settings",
    "get_base_settings",
    "load_project_config",
    "set_base_settings",
    "settings_scope",
]

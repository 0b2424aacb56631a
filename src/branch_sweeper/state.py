"""Shared state module for Branch Sweeper.

This module provides the single shared configuration instance used across
all tool modules.  Tool modules should import CONFIG from this module instead
of loading their own.
"""

from __future__ import annotations

from .config import Config

# Single shared configuration loaded once at import time
CONFIG: Config = Config.load_from_env()

"""
Global configuration for the sector layout library.

This module contains environment-specific settings that apply across all subspecs.
"""

import os

_SUPPORTED_SECTOR_ENVS: list[str] = ["prod", "test"]

SECTOR_ENV = os.environ.get("SECTOR_ENV", "prod").lower()
"""
The environment flag ('prod' or 'test'). Defaults to 'prod'.

Selects the default byte-domain converter: the Fr32 scheme in 'prod',
a one-to-one ratio in 'test' so worked examples read in whole leaves.
"""

if SECTOR_ENV not in _SUPPORTED_SECTOR_ENVS:
    raise ValueError(
        f"Invalid SECTOR_ENV environment variable: '{SECTOR_ENV}'. "
        f"Supported values: {_SUPPORTED_SECTOR_ENVS}"
    )

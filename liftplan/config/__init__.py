"""Application configuration module.

- **settings.py**: Environment-based settings (pydantic-settings)
  - Log level/format, data directory, generation config override
  - Loaded from LIFTPLAN_* variables or a .env file

- **generation_config.yaml**: Scoring, selection, allocation and
  progression constants
  - Loaded and validated by GenerationConfigLoader
"""
from liftplan.config.settings import Settings, get_settings

# Use: from liftplan.config.generation_config_loader import get_generation_config

__all__ = ["Settings", "get_settings"]

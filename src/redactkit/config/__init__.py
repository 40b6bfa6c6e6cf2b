"""Configuration loading utilities.

Precedence of configuration sources:
    1. Package defaults (``defaults.yml``)
    2. Optional user-provided YAML passed to :func:`load_config`
    3. Environment variable referenced by ``detector.api_key_env``
"""

from .schema import ConfigModel, ensure_api_key, load_config

__all__ = ["ConfigModel", "ensure_api_key", "load_config"]

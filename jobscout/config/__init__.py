"""
Configuration for the job discovery engine.

Owns: the YAML schema, loading, and read-only lookup helpers
Never: Caches configuration at module level
"""

from jobscout.config.loader import DEFAULT_CONFIG_PATH, load_config
from jobscout.config.schema import JobDiscoveryConfig

__all__ = ["DEFAULT_CONFIG_PATH", "JobDiscoveryConfig", "load_config"]

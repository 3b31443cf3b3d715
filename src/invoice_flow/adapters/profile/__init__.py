"""Profile adapters."""

from .loader import expand_env, load_profile

__all__ = ["expand_env", "load_profile"]

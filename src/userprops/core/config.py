"""Nested pydantic-settings configuration.

Each sub-config reads its own ``USERPROPS_<GROUP>_*`` environment variables::

    export USERPROPS_PERSISTENCE_BACKEND=memory
    export USERPROPS_OBSERVABILITY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class PersistenceConfig(BaseSettings):
    """Persistence backend selection.

    ``backend`` is ``"file"``, ``"memory"`` or a dotted path such as
    ``mypackage.backends:RedisPersistence`` naming a zero-argument callable
    that returns a persistence backend.

    Env vars use ``USERPROPS_PERSISTENCE_`` prefix.
    """

    model_config = {"env_prefix": "USERPROPS_PERSISTENCE_"}

    backend: str = "file"
    file_path: Optional[Path] = None
    synchronized: bool = False


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``USERPROPS_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "USERPROPS_OBSERVABILITY_"}

    log_level: str = "INFO"


class AppSettings(BaseSettings):
    """Top-level settings aggregating all sub-configs."""

    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

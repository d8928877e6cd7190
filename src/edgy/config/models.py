"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, edgy.toml only contains overrides.
A fresh project needs only ``[database] url``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    url: str = "sqlite:///edgy.db"
    echo: bool = False


class TraversalConfig(BaseModel):
    """[traversal] section."""

    model_config = {"frozen": True}

    # Hops expanded by a recursive traversal when the caller sets no limit.
    # 0 expands until the frontier is exhausted.
    default_depth_limit: int = Field(default=0, ge=0)

"""Shared Pydantic base models."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Base model with strict, immutable defaults.

    Every configuration and report model in the engine derives from this so
    that a config value threaded through a call can never be mutated by it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

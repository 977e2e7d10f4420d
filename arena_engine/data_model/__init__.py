"""Shared data model primitives."""

from arena_engine.data_model.base import StrictBaseModel


__all__ = ["StrictBaseModel"]

"""Root engine configuration schema."""

import hashlib
import json
from typing import Annotated

from pydantic import Field

from arena_engine.config.schemas.attribution import AttributionConfig
from arena_engine.config.schemas.quality import QualityConfig
from arena_engine.config.schemas.rating import RatingConfig
from arena_engine.config.schemas.ranking import RankingConfig
from arena_engine.data_model import StrictBaseModel


class EngineConfig(StrictBaseModel):
    """Root configuration for engine.yaml.

    This is the single explicit configuration value threaded into every
    component; there is no ambient module state.

    Attributes:
        version: Schema version.
        rating: Glicko-2 parameters.
        quality: Quality scoring parameters.
        attribution: Shapley attribution parameters.
        ranking: Expected value and leaderboard parameters.
    """

    version: Annotated[str, Field(pattern=r"^\d+\.\d+$")] = "1.0"
    rating: RatingConfig = Field(default_factory=RatingConfig)
    quality: QualityConfig = Field(default_factory=QualityConfig)
    attribution: AttributionConfig = Field(default_factory=AttributionConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)

    def to_normalized_json(self) -> str:
        """Convert to normalized JSON with stable ordering.

        Returns:
            JSON string with sorted keys.
        """
        data = self.model_dump(mode="json")
        return json.dumps(data, sort_keys=True, separators=(",", ":"))

    def compute_checksum(self) -> str:
        """Compute SHA-256 checksum of the normalized configuration.

        Returns:
            Hex-encoded SHA-256 checksum.
        """
        return hashlib.sha256(self.to_normalized_json().encode("utf-8")).hexdigest()

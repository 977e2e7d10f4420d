"""Base accuracy lookup keyed by source identity."""

from arena_engine.config.schemas.base import AccuracyMatchMode
from arena_engine.config.schemas.quality import AccuracyConfig


class AccuracyTable:
    """Resolves a source identity to its configured base accuracy.

    In ``exact`` mode the identity must equal a table key (case-insensitive,
    surrounding whitespace ignored). In ``substring`` mode the first key, in
    configured order, contained in the identity wins; this lets display names
    such as "Encyclopedia Britannica" resolve to "britannica".
    """

    def __init__(self, config: AccuracyConfig | None = None) -> None:
        """Initialize the table.

        Args:
            config: Accuracy table configuration.
        """
        config = config or AccuracyConfig()
        self._entries = [
            (key.strip().lower(), value) for key, value in config.sources.items()
        ]
        self._exact = dict(self._entries)
        self._default = config.default
        self._match_mode = config.match_mode

    @property
    def default(self) -> float:
        """Accuracy used for unknown identities."""
        return self._default

    def resolve_key(self, source_identity: str) -> str | None:
        """Find the table key an identity resolves to.

        Args:
            source_identity: Source id or display name.

        Returns:
            Matching table key, or None when the identity is unknown.
        """
        identity = source_identity.strip().lower()
        if self._match_mode is AccuracyMatchMode.EXACT:
            return identity if identity in self._exact else None
        for key, _ in self._entries:
            if key in identity:
                return key
        return None

    def lookup(self, source_identity: str) -> float:
        """Return the base accuracy for an identity."""
        key = self.resolve_key(source_identity)
        if key is None:
            return self._default
        return self._exact[key]

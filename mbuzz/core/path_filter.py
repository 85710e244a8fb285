"""Request path filtering."""

from collections.abc import Iterable

from ..config import DEFAULT_SKIP_EXTENSIONS, DEFAULT_SKIP_PATHS, TrackingConfig


class PathFilter:
    """Decides whether a request path takes part in visitor/session tracking.

    A path is skipped when it starts with one of the skip prefixes
    (health checks, asset mounts, websocket endpoints, the tracking API
    itself) or ends with one of the skip extensions (static assets).
    Matching is case-sensitive and literal.
    """

    def __init__(
        self,
        skip_paths: Iterable[str] = DEFAULT_SKIP_PATHS,
        skip_extensions: Iterable[str] = DEFAULT_SKIP_EXTENSIONS,
    ):
        self.skip_paths = tuple(skip_paths)
        self.skip_extensions = tuple(skip_extensions)

    @classmethod
    def from_config(cls, config: TrackingConfig) -> "PathFilter":
        """Build a filter from the defaults plus the configured extras."""
        return cls(config.all_skip_paths, config.all_skip_extensions)

    def should_skip(self, path: str) -> bool:
        if any(path.startswith(prefix) for prefix in self.skip_paths):
            return True
        return any(path.endswith(ext) for ext in self.skip_extensions)

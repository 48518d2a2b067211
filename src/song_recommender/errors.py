"""Error types shared by the recommendation pipeline."""


class RecommenderError(RuntimeError):
    """Base class for failures surfaced to Slack users."""


class MalformedLinkError(RecommenderError, ValueError):
    """Raised when a shared link does not have the ``domain/type/id`` shape."""


class NoMatchError(RecommenderError, LookupError):
    """Raised when the fuzzy resolver has no candidate to choose from."""


class UpstreamFetchError(RecommenderError):
    """Raised when a catalog request fails, including cursor fetches."""


class MalformedResponseError(RecommenderError):
    """Raised when a catalog response lacks the expected tracks/paging shape."""

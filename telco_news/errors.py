class NewsAggregatorError(Exception):
    """Base class for aggregator failures."""


class ConfigurationError(NewsAggregatorError):
    """A required credential or setting is missing."""


class SourceFetchError(NewsAggregatorError):
    """A news source could not be fetched or returned an unusable payload."""

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source

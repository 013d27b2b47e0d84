"""Error taxonomy for forecast lookups.

Every error carries a message suitable for showing to the user as-is.
"""


class ForecastError(Exception):
    """Base class for failures that abort a forecast lookup."""


class InvalidLocation(ForecastError):
    """The query does not resolve to a known place."""


class UpstreamError(ForecastError):
    """A required weather API call failed, timed out or returned non-2xx."""


class MalformedResponse(UpstreamError):
    """A successful response was missing fields the pipeline requires."""

class ConfigError(Exception):
    """Raised at startup when the environment cannot produce valid settings."""


class MarketMapperError(Exception):
    """Base for errors that end a request with a rendered error page."""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class SubmissionValidationError(MarketMapperError):
    status_code = 400


class AuthenticationError(MarketMapperError):
    status_code = 401


class UpstreamServiceError(MarketMapperError):
    status_code = 502


class ModelServiceError(UpstreamServiceError):
    pass


class MapDataError(UpstreamServiceError):
    pass


class ScoringParseError(UpstreamServiceError):
    pass

"""
Domain exceptions for the prediction system.
"""

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please wait a minute before trying again."
GENERIC_PREDICTION_MESSAGE = "Failed to generate grounded prediction."


class PredictionException(Exception):
    """Base exception for prediction-related errors."""
    pass


class PredictionUsageError(PredictionException, ValueError):
    """Exception raised when the caller omits a required team name."""
    pass


class PredictionConfigurationError(PredictionException):
    """Exception raised when the generative AI service has no API key configured."""
    pass


class PredictionRateLimitError(PredictionException):
    """Exception raised when the AI vendor rejects the call with HTTP 429."""

    def __init__(self, message: str = RATE_LIMIT_MESSAGE):
        super().__init__(message)

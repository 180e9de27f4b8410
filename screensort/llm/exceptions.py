class ModelError(Exception):
    """Raised when the generative model call fails for a reason with no specific tag."""


class ModelUnavailableError(ModelError):
    """Raised when no model is configured or the provider cannot be reached."""


class ModelRateLimitedError(ModelError):
    """Raised when the provider rejects the call because of rate limiting."""


class ModelSafetyRejectedError(ModelError):
    """Raised when the provider refuses the prompt or response on safety grounds."""


class ModelResponseError(ModelError):
    """Raised when the provider response cannot be parsed into the expected shape."""

class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class GitHubError(Exception):
    """Base class for everything the GitHub client and adapter raise."""


class InvalidArgument(GitHubError):
    pass


class SerializationError(GitHubError):
    pass


class TransportError(GitHubError):
    pass


class RateLimited(GitHubError):
    def __init__(self, remaining: str, reset: str):
        self.remaining = remaining
        self.reset = reset
        super().__init__(f"rate limit exceeded. Remaining: {remaining}, Reset at: {reset}")


class UpstreamError(GitHubError):
    def __init__(self, status: str, body: str | None = None):
        self.status = status
        self.body = body
        if body is None:
            message = f"error: {status}"
        else:
            message = f"error: {status}, response: {body}"
        super().__init__(message)


class DecodeError(GitHubError):
    pass

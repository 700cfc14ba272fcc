"""repoclaim exception classes."""



class RepoClaimError(Exception):
    """Base exception for all repoclaim errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(RepoClaimError):
    """Raised when client configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class InvalidIdentifierError(RepoClaimError):
    """Raised when a repository identifier is not of the form owner/name."""

    def __init__(self, identifier: str) -> None:
        super().__init__(
            "INVALID_IDENTIFIER",
            f"Invalid repository format '{identifier}'. Use: username/repository",
        )
        self.identifier = identifier


class AuthenticationError(RepoClaimError):
    """Raised when the token is rejected or no session user is present."""

    pass


class AuthorizationError(RepoClaimError):
    """Raised when access is denied."""

    pass


class ClaimDeniedError(AuthorizationError):
    """Raised when the caller does not own or administer the repository."""

    def __init__(self, verified_as: str, repo_owner: str) -> None:
        super().__init__(
            "FORBIDDEN",
            "You don't have the required permissions to claim this project. "
            "You must be either the repository owner or an organization owner. "
            f"Current user: {verified_as}, Repository owner: {repo_owner}",
        )
        self.verified_as = verified_as
        self.repo_owner = repo_owner


class NotFoundError(RepoClaimError):
    """Raised when a user, organization or repository does not exist upstream."""

    pass


class ConflictError(RepoClaimError):
    """Raised when a project has already been claimed."""

    pass


class ValidationError(RepoClaimError):
    """Raised on client-side request errors (4xx not covered elsewhere)."""

    pass


class InternalError(RepoClaimError):
    """Raised on upstream failures, network errors and unexpected payloads."""

    pass


class RateLimitedError(InternalError):
    """Raised when the provider rate limit is exhausted."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    def __init__(self, resource: str, resource_id: int | str) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} with id '{resource_id}' not found",
        )


class NotAuthenticatedError(HTTPException):
    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        )


class RecordNotFoundError(Exception):
    """Raised by a record store when an update or delete targets a missing id."""

    def __init__(self, resource: str, resource_id: int | str) -> None:
        super().__init__(f"{resource} with id {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id


class IdentityProviderError(Exception):
    """Raised when the OpenID Connect code exchange or userinfo lookup fails."""


class ConflictError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


class RecordConflictError(Exception):
    """Raised by a record store when a write would break a uniqueness rule."""

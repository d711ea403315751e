"""Domain layer errors.

Messages are safe to show to API callers. Store and driver details are
logged where they occur and only reachable through `__cause__`.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Caller input is missing or malformed."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DepthExceededError(DomainError):
    """Raised when replying to a comment that is already at maximum depth."""

    def __init__(self, parent_id: int, max_depth: int):
        self.parent_id = parent_id
        self.max_depth = max_depth
        super().__init__(
            f"Comment {parent_id} cannot receive replies: "
            f"nesting is limited to {max_depth} levels"
        )


class DataIntegrityError(DomainError):
    """Stored comment data is inconsistent (cycle, dangling parent, too deep)."""

    pass


class StoreError(DomainError):
    """The comment store failed (connectivity, constraint, timeout)."""

    pass

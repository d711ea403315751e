"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the business rules of the comment tree and talk
    to storage only through repository interfaces.
    """

    pass

"""Exceptions raised while resolving API documents."""


class ApiRefResolverError(Exception):
    """Base class for every failure of a resolution run."""


class ResourceError(ApiRefResolverError):
    """A referenced resource could not be fetched or parsed."""

    def __init__(self, locator: str, reason: str):
        self.locator = locator
        self.reason = reason
        super().__init__(f"Unable to load {locator}: {reason}")


class InvalidReferenceError(ApiRefResolverError):
    """A $ref value is malformed or does not address an existing item."""


class ComponentConflictError(ApiRefResolverError):
    """Two different sources define the same component."""

    def __init__(self, pointer: str, existing_source: str, new_source: str):
        self.pointer = pointer
        self.existing_source = existing_source
        self.new_source = new_source
        super().__init__(
            f"Component conflict at {pointer}: already defined from {existing_source}, "
            f"cannot also add it from {new_source}"
        )

"""Exceptions raised by the dispatch layer.

Two tiers: faults (:class:`UnknownCapabilityError`) propagate to the host,
which turns them into request-level failures; reported errors
(:class:`MissingArgumentError`, :class:`SearchProviderError`) describe a
valid request that could not be fulfilled.
"""


class CapabilityRequestError(Exception):
    """Base exception for caller errors."""
    pass


class UnknownCapabilityError(CapabilityRequestError):
    """No tool, prompt or resource is registered under the requested name."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        if kind == "resource":
            message = f"Unknown resource URI: {name}"
        else:
            message = f"Unknown {kind}: {name}"
        super().__init__(message)


class MissingArgumentError(CapabilityRequestError):
    """A required argument was not supplied."""

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"Missing required '{argument}' argument")


class SearchProviderError(Exception):
    """The outbound search call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class SearchClientError(ServiceError):
    """A true fetch failure; surfaced to the user as a message."""


class NetworkError(SearchClientError):
    pass


class ServerError(SearchClientError):
    pass


class StaleResponse(ServiceError):
    """A superseded response. Discarded silently, never shown to the user."""

# classstore/domain/errors.py


class MarketplaceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = 500


class ValidationError(MarketplaceError):
    status_code = 400


class NotFoundError(MarketplaceError):
    status_code = 404


class PriceMismatchError(MarketplaceError):
    """Submitted amount differs from the server-side product price."""

    status_code = 400


class InvalidTransitionError(MarketplaceError):
    status_code = 400


class AuthRequiredError(MarketplaceError):
    status_code = 401


class DownstreamError(MarketplaceError):
    """
    Email/PDF side effect failed.
    Logged by the order service, never returned to the client.
    """

    status_code = 502

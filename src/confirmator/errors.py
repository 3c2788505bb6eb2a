"""Exception hierarchy."""


class ConfirmatorError(Exception):
    """Base class for all Confirmator errors."""


class ConfigurationError(ConfirmatorError):
    """Startup configuration cannot be used."""


class CredentialError(ConfirmatorError):
    """Credential file is missing, unreadable or malformed."""


class SessionError(ConfirmatorError):
    """Base class for failures reported by an account session."""


class AuthExpiredError(SessionError):
    """Session token is stale or invalid; a refresh is required."""


class TransportError(SessionError):
    """Network or protocol failure that is not an authentication problem."""


class RefreshError(SessionError):
    """Session refresh failed; the credential cannot be salvaged."""

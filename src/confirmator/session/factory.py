"""Session construction from configuration."""

import importlib
import logging
from collections.abc import Callable

from confirmator.config import SessionConfig
from confirmator.errors import ConfigurationError
from confirmator.session.base import AccountSession
from confirmator.session.dry_run import DryRunSession
from confirmator.session.models import AccountCredentials

logger = logging.getLogger(__name__)

SessionFactory = Callable[[AccountCredentials], AccountSession]


def resolve_factory(path: str) -> SessionFactory:
    """Import a ``package.module:attribute`` session factory.

    Raises:
        ConfigurationError: The path is malformed or cannot be imported
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(f"Session backend must look like 'module:factory', got {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import session backend module {module_name!r}: {e}") from e

    factory = module
    for part in attr.split("."):
        try:
            factory = getattr(factory, part)
        except AttributeError as e:
            raise ConfigurationError(f"Session backend {path!r} has no attribute {part!r}") from e

    if not callable(factory):
        raise ConfigurationError(f"Session backend {path!r} is not callable")
    return factory


def create_session(credentials: AccountCredentials, config: SessionConfig) -> AccountSession:
    """Create the account session selected by configuration.

    Args:
        credentials: Parsed credential file
        config: Session configuration

    Returns:
        DryRunSession in dry run mode, otherwise the configured backend's session

    Raises:
        ConfigurationError: No usable backend is configured, or its factory failed
    """
    if config.dry_run:
        return DryRunSession.from_credentials(credentials, seed=config.dry_run_confirmations)

    if not config.backend:
        raise ConfigurationError(
            "No session backend configured. Set CONFIRMATOR_SESSION_BACKEND or DRY_RUN=true"
        )

    factory = resolve_factory(config.backend)
    try:
        session = factory(credentials)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(
            f"Session backend {config.backend!r} failed for {credentials.identity}: {e}"
        ) from e
    if not isinstance(session, AccountSession):
        raise ConfigurationError(
            f"Session backend {config.backend!r} returned {type(session).__name__}, "
            "expected an AccountSession"
        )
    logger.debug(f"Created {type(session).__name__} for {credentials.identity}")
    return session

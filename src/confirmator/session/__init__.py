"""Account session collaborator: interface, credentials and backends."""

from confirmator.session.base import AccountSession
from confirmator.session.credentials import load_credentials, parse_credentials
from confirmator.session.dry_run import DryRunSession, generate_confirmations
from confirmator.session.factory import create_session, resolve_factory
from confirmator.session.models import AccountCredentials, Confirmation, SessionData

__all__ = [
    "AccountCredentials",
    "AccountSession",
    "Confirmation",
    "DryRunSession",
    "SessionData",
    "create_session",
    "generate_confirmations",
    "load_credentials",
    "parse_credentials",
    "resolve_factory",
]

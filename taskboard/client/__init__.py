"""
Taskboard client: API access, credential storage, rendering and pages.
"""

from .api import ApiClientError, AuthenticationRequired, TaskApiClient
from .pages import DashboardElements, DashboardPage, LoginPage, RegisterPage
from .render import Element
from .storage import CredentialStore, FileCredentialStore

__all__ = [
    "ApiClientError",
    "AuthenticationRequired",
    "CredentialStore",
    "DashboardElements",
    "DashboardPage",
    "Element",
    "FileCredentialStore",
    "LoginPage",
    "RegisterPage",
    "TaskApiClient",
]

import logging
import os
from typing import Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.http import set_user_agent

from gcal_api.config import CalendarApiConfig
from gcal_api.errors import CredentialError

logger = logging.getLogger(__name__)


def load_credentials(config: CalendarApiConfig) -> service_account.Credentials:
    """
    Load the service account key, scope it to Calendar and impersonate the
    configured workspace user (domain-wide delegation).
    """
    key_file = config.service_account_file
    if not os.path.exists(key_file):
        raise CredentialError(f"Service account key file not found: {key_file}", operation="authenticate")

    try:
        creds = service_account.Credentials.from_service_account_file(key_file, scopes=config.scopes)
        if config.delegated_user:
            creds = creds.with_subject(config.delegated_user)
    except (OSError, ValueError, GoogleAuthError) as e:
        raise CredentialError(f"Could not load service account key: {e}", operation="authenticate") from e

    logger.info(
        "Loaded service account %s (delegated user: %s)",
        creds.service_account_email,
        config.delegated_user or "none",
    )
    return creds


def authorized_http(creds, application_name: str, http: Optional[httplib2.Http] = None) -> httplib2.Http:
    """Wrap the credentials in an httplib2 client that reports our application name."""
    http = AuthorizedHttp(creds, http=http or httplib2.Http())
    return set_user_agent(http, application_name)

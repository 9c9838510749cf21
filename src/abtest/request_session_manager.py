"""Manages HTTP request sessions and authentication headers."""
import base64
import logging
from typing import Dict

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


# Configure logging
logger = logging.getLogger(__name__)


class RequestSessionManager:
    """Manages HTTP request sessions for load traffic."""

    @staticmethod
    def create_session(pool_size: int = 10) -> requests.Session:
        """
        Create a requests session that never retries.

        Every attempt must map to exactly one recorded sample, so retries are
        disabled at the adapter level. The pool must hold a connection for every
        concurrent worker that may share a host.
        """
        session = requests.Session()
        retry = Retry(total=0, redirect=0, raise_on_status=False)
        adapter = HTTPAdapter(max_retries=retry, pool_connections=pool_size, pool_maxsize=pool_size)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session


def build_basic_auth_header(username: str, password: str) -> Dict[str, str]:
    """Return an Authorization header carrying base64("username:password")."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}

"""Handles individual request execution and timing."""
import time
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import requests

from .constants import ComparisonConstants
from .models import TransportResponse
from .request_session_manager import RequestSessionManager


# Configure logging
logger = logging.getLogger(__name__)


class Transport(ABC):
    """Issues one HTTP request and reports its status and duration."""

    @abstractmethod
    def issue_request(self, url: str, headers: Dict[str, str],
                      timeout_sec: float = ComparisonConstants.DEFAULT_TIMEOUT) -> TransportResponse:
        """
        Send a GET request.

        Returns:
            TransportResponse; status_code is None when no response arrived.
        """

    def close(self) -> None:
        pass


class RequestsTransport(Transport):
    """Transport backed by a shared requests session."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or RequestSessionManager.create_session()

    def issue_request(self, url: str, headers: Dict[str, str],
                      timeout_sec: float = ComparisonConstants.DEFAULT_TIMEOUT) -> TransportResponse:
        start_time = time.perf_counter()
        try:
            response = self.session.get(url, headers=headers, timeout=timeout_sec)
            status_code = response.status_code
        except requests.RequestException as e:
            # Timeouts and connection failures are recorded as failed samples
            logger.debug(f"Request to {url} failed: {e}")
            status_code = None
        end_time = time.perf_counter()
        return TransportResponse(status_code=status_code, duration_ms=(end_time - start_time) * 1000)

    def close(self) -> None:
        self.session.close()

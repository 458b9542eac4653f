"""HTTP utilities for the advocate directory client.

Provides a pooled requests.Session wrapper.  Failed requests are not
retried: a failed page fetch surfaces as an error and the caller decides
whether to try again.
"""

from typing import Optional

import requests
from requests.adapters import HTTPAdapter


class SessionManager:
    """Manages an HTTP session with connection pooling."""

    def __init__(self, pool_connections: int = 4, pool_maxsize: int = 8,
                 timeout: float = 10.0):
        """Initialize session manager.

        Args:
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum number of connections per pool
            timeout: Per-request timeout in seconds
        """
        self.pool_connections = pool_connections
        self.pool_maxsize = pool_maxsize
        self.timeout = timeout
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create the pooled HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            adapter = HTTPAdapter(
                max_retries=0,
                pool_connections=self.pool_connections,
                pool_maxsize=self.pool_maxsize,
            )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)
            self._session.headers.update({"Accept": "application/json"})

        return self._session

    def get_json(self, url: str, params: Optional[dict] = None) -> dict:
        """GET *url* and decode the JSON body.

        Raises:
            requests.RequestException: On connection errors and non-2xx
                responses (via raise_for_status).
            ValueError: If the body is not valid JSON.
        """
        response = self.session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def close(self) -> None:
        """Close the session and release resources."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

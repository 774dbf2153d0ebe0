from __future__ import annotations

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


def create_session(user_agent: Optional[str] = None, total_retries: int = 3) -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9,es;q=0.8",
        }
    )

    retry = Retry(
        total=total_retries,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
        raise_on_status=False,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def fetch_html(
    url: str,
    session: Optional[requests.Session] = None,
    timeout_seconds: int = 20,
) -> str:
    """
    Fetch a page and return its HTML.
    Raises requests.HTTPError for non-2xx responses.
    """
    sess = session or create_session()
    logger.debug("GET %s", url)
    response = sess.get(url, timeout=timeout_seconds, allow_redirects=True)
    response.raise_for_status()
    logger.debug("GET %s -> %s (%d bytes)", response.url, response.status_code, len(response.text))
    return response.text

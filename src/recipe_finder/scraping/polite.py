"""HTTP session for fetching recipe table pages."""

import random
import time
from typing import Optional, Tuple
from urllib import robotparser
from urllib.parse import urljoin

import requests

from .retry import TransientHTTPError, is_transient_status, retry_on_connection_error

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


def check_robots_allowed(base_url: str, url: str, user_agent: str = "*") -> bool:
    """Check if a URL is allowed by robots.txt.

    Args:
        base_url: Base URL of the site (e.g., "https://example.com")
        url: Full URL to check
        user_agent: User agent string to check against

    Returns:
        True if the URL is allowed, False otherwise. An unreadable robots.txt
        counts as allowed.
    """
    try:
        rp = robotparser.RobotFileParser()
        rp.set_url(urljoin(base_url, "/robots.txt"))
        rp.read()
        return rp.can_fetch(user_agent, url)
    except OSError:
        return True


class PoliteSession:
    """A requests session that checks robots.txt, waits between requests and
    retries transient failures.

    Attributes:
        session: The underlying requests session
        base_url: Base URL for robots.txt checking
        user_agent: User agent string
        crawl_delay: Delay before each request in seconds
        jitter_range: Random jitter range added to the delay
        timeout: Per-request timeout in seconds
        respect_robots: Whether to refuse URLs disallowed by robots.txt
    """

    def __init__(
        self,
        base_url: str,
        user_agent: str = DEFAULT_USER_AGENT,
        crawl_delay: float = 0.0,
        jitter_range: Tuple[float, float] = (0.0, 0.0),
        timeout: float = 25.0,
        respect_robots: bool = True,
    ):
        self.session = requests.Session()
        self.session.headers["User-Agent"] = user_agent
        self.session.headers["Accept"] = DEFAULT_ACCEPT
        self.base_url = base_url
        self.user_agent = user_agent
        self.crawl_delay = crawl_delay
        self.jitter_range = jitter_range
        self.timeout = timeout
        self.respect_robots = respect_robots

    def _is_allowed(self, url: str) -> bool:
        if not self.respect_robots:
            return True
        return check_robots_allowed(self.base_url, url, self.user_agent)

    def _wait(self) -> None:
        delay = self.crawl_delay + random.uniform(*self.jitter_range)
        if delay > 0:
            time.sleep(delay)

    @retry_on_connection_error()
    def _fetch(self, url: str, timeout: Optional[float] = None) -> requests.Response:
        self._wait()
        response = self.session.get(url, timeout=timeout or self.timeout)
        if is_transient_status(response.status_code):
            raise TransientHTTPError(
                f"server error: {response.status_code} for {url}", response=response
            )
        return response

    def get(self, url: str, timeout: Optional[float] = None) -> requests.Response:
        """Fetch a URL, retrying connection errors, 429 and 5xx responses.

        Args:
            url: URL to request
            timeout: Overrides the session timeout for this request

        Returns:
            Response object with a 2xx status

        Raises:
            RuntimeError: If robots.txt disallows the URL
            requests.HTTPError: On a non-2xx status, or a transient status
                that persists after the last retry
        """
        if not self._is_allowed(url):
            raise RuntimeError(f"robots.txt disallows {url}")

        response = self._fetch(url, timeout=timeout)
        response.raise_for_status()
        return response

"""
HTTP/HTTPS download of a published sheet export.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)


def fetch_text(url: str, timeout: Optional[float] = None) -> str:
    """
    Download ``url`` and return the response body as text.

    Only a 200 response counts as success; redirects are not followed and
    are reported like any other status.

    Args:
        url: Absolute http:// or https:// URL
        timeout: Seconds to wait for the server, or None to wait forever

    Returns:
        The decoded body

    Raises:
        TransportError: On connection failure or a non-200 status
    """
    scheme = urlsplit(url).scheme.lower()
    if scheme not in ("http", "https"):
        raise TransportError(f"Unsupported URL scheme: {scheme or '<none>'}", url=url)

    logger.debug("GET %s", url)
    try:
        response = requests.get(url, timeout=timeout, allow_redirects=False)
    except requests.RequestException as e:
        raise TransportError(str(e), url=url) from e

    if response.status_code != 200:
        raise TransportError(
            f"HTTP {response.status_code}: {response.reason}",
            url=url,
            status_code=response.status_code,
            reason=response.reason,
        )

    # requests falls back to ISO-8859-1 for text/* without a charset
    if "charset" in response.headers.get("Content-Type", "").lower():
        response.encoding = requests.utils.get_encoding_from_headers(response.headers)
    else:
        response.encoding = "utf-8"

    text = response.text
    logger.debug("Received %d bytes from %s", len(response.content), url)
    return text

"""
HTTP client integration for request signing

This module plugs Upyun signature authorization into the requests library,
so outgoing requests are signed as they are prepared.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest

from .credentials import UpyunCredentials, content_md5, format_http_date

logger = logging.getLogger(__name__)


class UpyunSignatureAuth(AuthBase):
    """
    requests authentication handler producing ``UPYUN`` signatures.

    The signed URI is the percent-encoded request path as sent. The ``Date``
    header is added when the caller did not set one so that the signed date
    matches the header.
    """

    def __init__(self, credentials: UpyunCredentials, include_content_md5: bool = False):
        self.credentials = credentials
        self.include_content_md5 = include_content_md5

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        date = request.headers.get('Date')
        if not date:
            date = format_http_date()
            request.headers['Date'] = date

        checksum = request.headers.get('Content-MD5')
        if checksum is None and self.include_content_md5:
            checksum = self._body_md5(request)
            if checksum is not None:
                request.headers['Content-MD5'] = checksum

        # PreparedRequest URLs are already percent-encoded; sign the path as sent
        uri = urlsplit(request.url).path or '/'

        request.headers['Authorization'] = self.credentials.signature_token(
            request.method, uri, date, checksum, uri_encoded=True
        )
        logger.debug(f"Signed {request.method} request to {request.url}")
        return request

    @staticmethod
    def _body_md5(request: PreparedRequest) -> Optional[str]:
        body = request.body
        if body is None or isinstance(body, (str, bytes, bytearray)):
            return content_md5(body)

        logger.warning(
            f"Cannot compute Content-MD5 for streamed body of type {type(body).__name__}; skipping"
        )
        return None


def create_signing_session(
    credentials: UpyunCredentials,
    session: Optional[requests.Session] = None,
    include_content_md5: bool = False
) -> requests.Session:
    """
    Create (or configure) a requests session that signs every request.

    Args:
        credentials: Operator credentials
        session: Optional existing session to configure
        include_content_md5: Add a Content-MD5 header for in-memory bodies

    Returns:
        requests.Session: Session with Upyun signature authentication
    """
    session = session or requests.Session()
    session.auth = UpyunSignatureAuth(credentials, include_content_md5=include_content_md5)
    logger.info(f"Configured request signing for operator: {credentials.operator}")
    return session

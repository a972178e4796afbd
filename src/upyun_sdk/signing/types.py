"""
Type definitions for Upyun request signing

This module provides the data classes that describe what goes into an
Upyun ``Authorization: UPYUN`` signature.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, List


class HttpMethod(str, Enum):
    """HTTP methods accepted by the Upyun REST API"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"


@dataclass
class SignaturePayload:
    """
    Components of an Upyun signing string

    Attributes:
        method: Upper-case HTTP method
        uri: Percent-encoded request URI (``/<bucket>/<path>``)
        date: RFC 1123 GMT date, identical to the ``Date`` header
        content_md5: Optional hex MD5 of the request body
    """
    method: HttpMethod
    uri: str
    date: str
    content_md5: Optional[str] = None

    def __post_init__(self):
        """Validate payload after initialization"""
        if not self.uri:
            raise ValueError("Request URI cannot be empty")

        if not self.date:
            raise ValueError("Date cannot be empty")

    def parts(self) -> List[str]:
        parts = [self.method.value, self.uri, self.date]
        if self.content_md5 is not None:
            parts.append(self.content_md5)
        return parts

    def to_signing_string(self) -> str:
        """Join the components as ``METHOD&URI&DATE[&CONTENT-MD5]``."""
        return '&'.join(self.parts())


class SigningErrorCodes:
    """Standard error codes for signing operations"""

    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_METHOD = "INVALID_METHOD"
    INVALID_URI = "INVALID_URI"
    INVALID_DATE = "INVALID_DATE"
    INVALID_BODY = "INVALID_BODY"

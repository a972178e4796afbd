"""
Upyun Python SDK - Request Signing Module

Builds ``Basic`` and ``UPYUN`` authorization values for the Upyun storage
REST API and wires them into the requests library.
"""

from .types import (
    HttpMethod,
    SignaturePayload,
    SigningErrorCodes,
)

from .credentials import (
    UpyunCredentials,
    encode_uri,
    format_http_date,
    content_md5,
)

from .integration import (
    UpyunSignatureAuth,
    create_signing_session,
)

# Public API exports
__all__ = [
    # Types
    'HttpMethod',
    'SignaturePayload',
    'SigningErrorCodes',

    # Credentials
    'UpyunCredentials',
    'encode_uri',
    'format_http_date',
    'content_md5',

    # HTTP Integration
    'UpyunSignatureAuth',
    'create_signing_session',
]

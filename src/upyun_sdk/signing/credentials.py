"""
Upyun operator credentials and authorization tokens

Implements the two authorization schemes of the Upyun storage REST API:

```
Authorization: Basic <Base64(operator:secret)>
Authorization: UPYUN <Operator>:<Signature>
<Signature> = Base64(
  HMAC-SHA1(
    <Password>,
    <Method>&<URI>&<Date>&<Content-MD5> (optional)
  )
)
<Password> = Hex(MD5(<Secret>))
```
"""

import logging
from datetime import datetime, timezone
from email.utils import formatdate, parsedate_to_datetime
from typing import Optional, Union
from urllib.parse import quote

from ..exceptions import EncodingError, SigningError, ValidationError
from ..hashing import encode_utf8, hmac_sha1, md5, to_base64, to_bytes, to_hex
from .types import HttpMethod, SignaturePayload, SigningErrorCodes

logger = logging.getLogger(__name__)

# Characters JavaScript's encodeURI leaves untouched besides [A-Za-z0-9-_.~]
URI_SAFE_CHARACTERS = ";,/?:@&=+$!*'()#"

DateInput = Union[datetime, int, float, str, None]
BodyInput = Union[str, bytes, bytearray, memoryview, None]


def encode_uri(uri: str) -> str:
    """
    Percent-encode a URI the way the Upyun gateway expects.

    Reserved characters are kept; everything else outside the unreserved set
    is UTF-8 encoded and percent-escaped.
    """
    try:
        return quote(encode_utf8(uri), safe=URI_SAFE_CHARACTERS)
    except EncodingError as e:
        raise SigningError(f"Cannot encode URI: {e}", SigningErrorCodes.INVALID_URI, {"uri": uri})


def format_http_date(value: DateInput = None) -> str:
    """
    Render a date as an RFC 1123 GMT string.

    Args:
        value: datetime (naive values are taken as UTC), Unix timestamp in
               seconds, an RFC 1123 or ISO 8601 string, or None for now

    Returns:
        str: Date such as ``Mon, 19 Oct 2026 09:00:00 GMT``

    Raises:
        SigningError: If the value cannot be interpreted as a date
    """
    if value is None:
        return formatdate(usegmt=True)

    if isinstance(value, bool):
        raise SigningError("Date cannot be a boolean", SigningErrorCodes.INVALID_DATE)

    if isinstance(value, (int, float)):
        return formatdate(value, usegmt=True)

    if isinstance(value, str):
        value = _parse_date_string(value)

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return formatdate(value.timestamp(), usegmt=True)

    raise SigningError(
        f"Unsupported date type: {type(value).__name__}",
        SigningErrorCodes.INVALID_DATE,
        {"date_type": type(value).__name__}
    )


def _parse_date_string(text: str) -> datetime:
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError):
        pass

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise SigningError(f"Unrecognized date: {text!r}", SigningErrorCodes.INVALID_DATE, {"date": text})


def content_md5(body: BodyInput) -> str:
    """Hex MD5 of a request body, as sent in the ``Content-MD5`` header."""
    if body is None:
        body = b""
    try:
        return to_hex(md5(to_bytes(body)))
    except ValidationError as e:
        raise SigningError(str(e), SigningErrorCodes.INVALID_BODY, {"body_type": type(body).__name__})


class UpyunCredentials:
    """
    Operator name and secret for an Upyun storage service.

    The secret is never logged or included in error details.
    """

    def __init__(self, operator: str, secret: str):
        if not operator or not isinstance(operator, str):
            raise ValidationError("Operator must be a non-empty string", SigningErrorCodes.INVALID_CREDENTIALS)
        if not secret or not isinstance(secret, str):
            raise ValidationError("Secret must be a non-empty string", SigningErrorCodes.INVALID_CREDENTIALS)

        self.operator = operator
        self.secret = secret

    def __repr__(self) -> str:
        return f"UpyunCredentials(operator={self.operator!r})"

    @property
    def password(self) -> str:
        """Signing password: hex MD5 of the secret."""
        return to_hex(md5(self.secret))

    def basic_token(self) -> str:
        """Build a ``Basic`` authorization value."""
        return f"Basic {to_base64(encode_utf8(f'{self.operator}:{self.secret}'))}"

    def build_payload(
        self,
        method: Union[str, HttpMethod],
        uri: str,
        date: DateInput = None,
        content_md5: Optional[str] = None,
        uri_encoded: bool = False
    ) -> SignaturePayload:
        """
        Assemble the components that get signed.

        A URI that is already percent-encoded (uri_encoded=True) is signed as
        given, so escaped reserved characters such as %3F stay escaped.

        Raises:
            SigningError: If the method, URI or date is invalid
        """
        try:
            http_method = method if isinstance(method, HttpMethod) else HttpMethod(method.upper())
        except (AttributeError, ValueError):
            raise SigningError(
                f"Unsupported HTTP method: {method}",
                SigningErrorCodes.INVALID_METHOD,
                {"method": str(method)}
            )

        if not uri:
            raise SigningError("Request URI cannot be empty", SigningErrorCodes.INVALID_URI)

        return SignaturePayload(
            method=http_method,
            uri=uri if uri_encoded else encode_uri(uri),
            date=format_http_date(date),
            content_md5=content_md5,
        )

    def signature_token(
        self,
        method: Union[str, HttpMethod],
        uri: str,
        date: DateInput = None,
        content_md5: Optional[str] = None,
        uri_encoded: bool = False
    ) -> str:
        """
        Build an ``UPYUN`` signature authorization value.

        Args:
            method: HTTP method (case-insensitive)
            uri: Unencoded request URI, ``/<bucket>/<path>``
            date: Request date; must equal the ``Date`` header sent
            content_md5: Optional hex MD5 of the body
            uri_encoded: The URI is already percent-encoded as sent on the wire

        Returns:
            str: ``UPYUN <operator>:<signature>``
        """
        payload = self.build_payload(method, uri, date, content_md5, uri_encoded)
        signature = to_base64(hmac_sha1(payload.to_signing_string(), self.password))

        logger.debug(f"Signed {payload.method.value} {payload.uri} for operator {self.operator}")
        return f"UPYUN {self.operator}:{signature}"

"""
Test suite for Upyun request signing

This module tests credential tokens, signing-string construction and the
requests authentication integration.
"""

import base64
import hashlib
import hmac
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

import pytest
import requests

from upyun_sdk.signing import (
    # Types
    HttpMethod,
    SignaturePayload,
    # Credentials
    UpyunCredentials,
    encode_uri,
    format_http_date,
    content_md5,
    # HTTP Integration
    UpyunSignatureAuth,
    create_signing_session,
)
from upyun_sdk.exceptions import SigningError, ValidationError

OPERATOR = "operator"
SECRET = "password"
DATE = "Mon, 19 Oct 2026 09:00:00 GMT"


def reference_token(operator: str, secret: str, signing_string: str) -> str:
    """Compute an UPYUN token with the standard library"""
    password = hashlib.md5(secret.encode("utf-8")).hexdigest()
    mac = hmac.new(password.encode("utf-8"), signing_string.encode("utf-8"), hashlib.sha1)
    return f"UPYUN {operator}:{base64.b64encode(mac.digest()).decode('ascii')}"


@pytest.fixture
def credentials():
    return UpyunCredentials(OPERATOR, SECRET)


class TestSignaturePayload:
    """Test signing string assembly"""

    def test_signing_string_without_md5(self):
        payload = SignaturePayload(HttpMethod.GET, "/bucket/a.txt", DATE)
        assert payload.to_signing_string() == f"GET&/bucket/a.txt&{DATE}"

    def test_signing_string_with_md5(self):
        payload = SignaturePayload(HttpMethod.PUT, "/bucket/a.txt", DATE, "abc123")
        assert payload.to_signing_string() == f"PUT&/bucket/a.txt&{DATE}&abc123"

    def test_empty_uri_rejected(self):
        with pytest.raises(ValueError):
            SignaturePayload(HttpMethod.GET, "", DATE)


class TestHelpers:
    """Test URI, date and Content-MD5 helpers"""

    def test_encode_uri_keeps_reserved_characters(self):
        assert encode_uri("/bucket/a-b_c.d~e/f?x=1&y=2#frag") == "/bucket/a-b_c.d~e/f?x=1&y=2#frag"

    def test_encode_uri_escapes_unicode_and_spaces(self):
        assert encode_uri("/bucket/文件 name.txt") == "/bucket/%E6%96%87%E4%BB%B6%20name.txt"

    def test_encode_uri_escapes_percent(self):
        assert encode_uri("/bucket/100%.txt") == "/bucket/100%25.txt"

    def test_encode_uri_unpaired_surrogate(self):
        with pytest.raises(SigningError):
            encode_uri("/bucket/\udc80")

    def test_format_epoch_seconds(self):
        assert format_http_date(0) == "Thu, 01 Jan 1970 00:00:00 GMT"

    def test_format_datetime(self):
        aware = datetime(2026, 10, 19, 9, 0, 0, tzinfo=timezone.utc)
        naive = datetime(2026, 10, 19, 9, 0, 0)
        assert format_http_date(aware) == DATE
        assert format_http_date(naive) == DATE

    def test_format_strings(self):
        assert format_http_date(DATE) == DATE
        assert format_http_date("2026-10-19T09:00:00+00:00") == DATE
        assert format_http_date("2026-10-19T17:00:00+08:00") == DATE

    def test_format_now(self):
        parsed = parsedate_to_datetime(format_http_date())
        assert abs((datetime.now(timezone.utc) - parsed).total_seconds()) < 5

    @pytest.mark.parametrize("value", ["not a date", True, [2026, 10, 19]])
    def test_format_invalid(self, value):
        with pytest.raises(SigningError) as exc_info:
            format_http_date(value)
        assert exc_info.value.error_code == "INVALID_DATE"

    def test_content_md5(self):
        assert content_md5(b"hello") == hashlib.md5(b"hello").hexdigest()
        assert content_md5("hello") == hashlib.md5(b"hello").hexdigest()
        assert content_md5(None) == "d41d8cd98f00b204e9800998ecf8427e"

    def test_content_md5_invalid_body(self):
        with pytest.raises(SigningError):
            content_md5(12345)


class TestUpyunCredentials:
    """Test credential tokens"""

    def test_requires_operator_and_secret(self):
        with pytest.raises(ValidationError):
            UpyunCredentials("", SECRET)
        with pytest.raises(ValidationError):
            UpyunCredentials(OPERATOR, "")

    def test_repr_hides_secret(self, credentials):
        assert SECRET not in repr(credentials)

    def test_password_is_hex_md5(self, credentials):
        assert credentials.password == hashlib.md5(SECRET.encode()).hexdigest()

    def test_basic_token(self, credentials):
        expected = base64.b64encode(f"{OPERATOR}:{SECRET}".encode()).decode()
        assert credentials.basic_token() == f"Basic {expected}"

    def test_signature_token_matches_reference(self, credentials):
        token = credentials.signature_token("GET", "/bucket/path/file.txt", DATE)
        assert token == reference_token(OPERATOR, SECRET, f"GET&/bucket/path/file.txt&{DATE}")

    def test_signature_token_with_content_md5(self, credentials):
        checksum = content_md5(b"body")
        token = credentials.signature_token("put", "/bucket/file.txt", DATE, checksum)
        expected = reference_token(OPERATOR, SECRET, f"PUT&/bucket/file.txt&{DATE}&{checksum}")
        assert token == expected

    def test_signature_token_encodes_uri(self, credentials):
        token = credentials.signature_token(HttpMethod.DELETE, "/bucket/文件.txt", DATE)
        expected = reference_token(
            OPERATOR, SECRET, f"DELETE&/bucket/%E6%96%87%E4%BB%B6.txt&{DATE}"
        )
        assert token == expected

    def test_signature_token_normalizes_date(self, credentials):
        from_datetime = credentials.signature_token(
            "GET", "/bucket/", datetime(2026, 10, 19, 9, 0, 0, tzinfo=timezone.utc)
        )
        assert from_datetime == credentials.signature_token("GET", "/bucket/", DATE)

    def test_signature_token_format(self, credentials):
        token = credentials.signature_token("GET", "/bucket/", DATE)
        prefix, signature = token.split(":", 1)
        assert prefix == f"UPYUN {OPERATOR}"
        assert len(base64.b64decode(signature)) == 20

    def test_signature_token_pre_encoded_uri(self, credentials):
        """An already-encoded URI is signed without encoding it again"""
        token = credentials.signature_token("GET", "/bucket/a%3Fb.txt", DATE, uri_encoded=True)
        assert token == reference_token(OPERATOR, SECRET, f"GET&/bucket/a%3Fb.txt&{DATE}")
        assert token != credentials.signature_token("GET", "/bucket/a%3Fb.txt", DATE)

    def test_unsupported_method(self, credentials):
        with pytest.raises(SigningError) as exc_info:
            credentials.signature_token("FETCH", "/bucket/", DATE)
        assert exc_info.value.error_code == "INVALID_METHOD"

    def test_empty_uri(self, credentials):
        with pytest.raises(SigningError) as exc_info:
            credentials.signature_token("GET", "", DATE)
        assert exc_info.value.error_code == "INVALID_URI"


class TestRequestsIntegration:
    """Test the requests authentication handler"""

    def test_signs_prepared_request(self, credentials):
        request = requests.Request(
            "GET",
            "https://v0.api.upyun.com/bucket/dir/file.txt",
            headers={"Date": DATE},
            auth=UpyunSignatureAuth(credentials),
        ).prepare()

        assert request.headers["Authorization"] == credentials.signature_token(
            "GET", "/bucket/dir/file.txt", DATE
        )
        assert "Content-MD5" not in request.headers

    def test_adds_date_header(self, credentials):
        request = requests.Request(
            "GET", "https://v0.api.upyun.com/bucket/", auth=UpyunSignatureAuth(credentials)
        ).prepare()

        date = request.headers["Date"]
        assert date.endswith(" GMT")
        assert request.headers["Authorization"] == credentials.signature_token("GET", "/bucket/", date)

    def test_unicode_path_is_signed_once_encoded(self, credentials):
        request = requests.Request(
            "PUT",
            "https://v0.api.upyun.com/bucket/文件.txt",
            data=b"hello",
            headers={"Date": DATE},
            auth=UpyunSignatureAuth(credentials, include_content_md5=True),
        ).prepare()

        checksum = hashlib.md5(b"hello").hexdigest()
        assert request.headers["Content-MD5"] == checksum
        assert request.headers["Authorization"] == reference_token(
            OPERATOR, SECRET, f"PUT&/bucket/%E6%96%87%E4%BB%B6.txt&{DATE}&{checksum}"
        )

    @pytest.mark.parametrize("url,wire_path", [
        ("https://v0.api.upyun.com/bucket/a%3Fb.txt", "/bucket/a%3Fb.txt"),
        ("https://v0.api.upyun.com/bucket/a%23b.txt", "/bucket/a%23b.txt"),
        ("https://v0.api.upyun.com/bucket/a%26b%2Fc.txt", "/bucket/a%26b%2Fc.txt"),
        ("https://v0.api.upyun.com/bucket/my file.txt", "/bucket/my%20file.txt"),
    ])
    def test_escaped_reserved_characters_are_signed_as_sent(self, credentials, url, wire_path):
        """The signed URI is the path exactly as it goes on the wire"""
        request = requests.Request(
            "GET", url, headers={"Date": DATE}, auth=UpyunSignatureAuth(credentials)
        ).prepare()

        assert request.path_url == wire_path
        assert request.headers["Authorization"] == reference_token(
            OPERATOR, SECRET, f"GET&{wire_path}&{DATE}"
        )

    def test_existing_content_md5_is_signed(self, credentials):
        request = requests.Request(
            "PUT",
            "https://v0.api.upyun.com/bucket/a.txt",
            data=b"hello",
            headers={"Date": DATE, "Content-MD5": "0123456789abcdef0123456789abcdef"},
            auth=UpyunSignatureAuth(credentials, include_content_md5=True),
        ).prepare()

        assert request.headers["Content-MD5"] == "0123456789abcdef0123456789abcdef"
        assert request.headers["Authorization"] == credentials.signature_token(
            "PUT", "/bucket/a.txt", DATE, "0123456789abcdef0123456789abcdef"
        )

    def test_streamed_body_skips_content_md5(self, credentials):
        def chunks():
            yield b"hello"

        request = requests.Request(
            "PUT",
            "https://v0.api.upyun.com/bucket/a.txt",
            data=chunks(),
            headers={"Date": DATE},
            auth=UpyunSignatureAuth(credentials, include_content_md5=True),
        ).prepare()

        assert "Content-MD5" not in request.headers
        assert request.headers["Authorization"] == credentials.signature_token(
            "PUT", "/bucket/a.txt", DATE
        )

    def test_create_signing_session(self, credentials):
        session = create_signing_session(credentials)
        assert isinstance(session.auth, UpyunSignatureAuth)

        prepared = session.prepare_request(
            requests.Request("HEAD", "https://v0.api.upyun.com/bucket/a.txt", headers={"Date": DATE})
        )
        assert prepared.headers["Authorization"] == credentials.signature_token(
            "HEAD", "/bucket/a.txt", DATE
        )

    def test_create_signing_session_reuses_session(self, credentials):
        existing = requests.Session()
        assert create_signing_session(credentials, session=existing) is existing

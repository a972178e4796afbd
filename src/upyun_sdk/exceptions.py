"""
Exception classes for Upyun Python SDK
"""

from typing import Optional, Dict, Any


class UpyunSDKError(Exception):
    """Base exception for all Upyun SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class EncodingError(UpyunSDKError):
    """Exception raised for malformed text, hex or base64 input"""
    pass


class LengthOverflowError(UpyunSDKError):
    """Exception raised when a message is too long for the digest length field"""
    pass


class ValidationError(UpyunSDKError):
    """Exception raised for validation failures"""
    pass


class ConfigError(UpyunSDKError):
    """Exception raised for configuration loading errors"""
    pass


class SigningError(UpyunSDKError):
    """Exception raised when an authorization token cannot be built"""
    pass

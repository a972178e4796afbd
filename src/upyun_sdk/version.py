"""Version information for Upyun Python SDK"""

__version__ = "0.1.0"

"""
Command-line interface for Upyun Python SDK
Computes digests and builds authorization values for the Upyun REST API
"""

import argparse
import logging
import os
import sys
from typing import Optional

from . import __version__
from .config import LoggingConfig, UpyunConfig, configure_logging
from .exceptions import ConfigError, UpyunSDKError
from .hashing import check_platform_compatibility, encode_utf8, hmac_sha1, md5, sha1, to_base64, to_hex
from .signing import UpyunCredentials, content_md5

logger = logging.getLogger(__name__)

DIGESTS = {
    'md5': md5,
    'sha1': sha1,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='upyun-cli',
        description='Upyun SDK command-line interface for digests and request signing'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Upyun Python SDK {__version__}'
    )

    parser.add_argument(
        '--check-compatibility',
        action='store_true',
        help='Compare digests against the cryptography package and exit'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase log verbosity (-v info, -vv debug)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_digest_parsers(subparsers)
    setup_sign_parser(subparsers)

    return parser


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('text', nargs='?', help='Text to hash (UTF-8)')
    source.add_argument('--file', help='Hash the contents of a file instead')
    parser.add_argument(
        '--format',
        choices=['hex', 'base64'],
        default='hex',
        help='Output format for the digest (default: hex)'
    )


def setup_digest_parsers(subparsers):
    """Setup md5, sha1 and hmac-sha1 subcommands."""
    for name in DIGESTS:
        digest_parser = subparsers.add_parser(name, help=f'Compute the {name.upper()} digest')
        _add_input_arguments(digest_parser)

    hmac_parser = subparsers.add_parser('hmac-sha1', help='Compute an HMAC-SHA1 code')
    _add_input_arguments(hmac_parser)
    hmac_parser.add_argument('--key', required=True, help='HMAC key (UTF-8)')


def setup_sign_parser(subparsers):
    """Setup the sign subcommand."""
    sign_parser = subparsers.add_parser('sign', help='Build an Authorization header value')
    sign_parser.add_argument('--operator', help='Operator name (default: $UPYUN_OPERATOR)')
    sign_parser.add_argument('--secret', help='Operator secret (default: $UPYUN_SECRET)')
    sign_parser.add_argument('--config', help='JSON configuration file with operator and secret')
    sign_parser.add_argument('--method', default='GET', help='HTTP method (default: GET)')
    sign_parser.add_argument('--uri', required=True, help='Request URI, /<bucket>/<path>')
    sign_parser.add_argument('--date', help='RFC 1123 or ISO 8601 date (default: now)')
    checksum = sign_parser.add_mutually_exclusive_group()
    checksum.add_argument('--content-md5', help='Hex MD5 of the request body')
    checksum.add_argument('--body-file', help='Compute Content-MD5 from this file')
    sign_parser.add_argument('--basic', action='store_true', help='Print a Basic token instead')


def _read_file(path: str) -> bytes:
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise UpyunSDKError(f"Cannot read {path}: {e}", "FILE_ERROR")


def _read_input(args) -> bytes:
    if args.file:
        return _read_file(args.file)
    return encode_utf8(args.text)


def _render(digest: bytes, output_format: str) -> str:
    return to_base64(digest) if output_format == 'base64' else to_hex(digest)


def handle_digest_command(args) -> int:
    """Handle md5 / sha1 / hmac-sha1 commands."""
    data = _read_input(args)
    if args.command == 'hmac-sha1':
        digest = hmac_sha1(data, args.key)
    else:
        digest = DIGESTS[args.command](data)

    print(_render(digest, args.format))
    return 0


def _load_credentials(args) -> UpyunCredentials:
    if args.config:
        return UpyunConfig.from_file(args.config).to_credentials()

    operator = args.operator or os.environ.get('UPYUN_OPERATOR')
    secret = args.secret or os.environ.get('UPYUN_SECRET')
    if not operator or not secret:
        raise ConfigError(
            "Operator and secret are required (use --operator/--secret or UPYUN_OPERATOR/UPYUN_SECRET)",
            "MISSING_CREDENTIALS"
        )
    return UpyunCredentials(operator, secret)


def handle_sign_command(args) -> int:
    """Handle the sign command."""
    credentials = _load_credentials(args)

    if args.basic:
        print(credentials.basic_token())
        return 0

    checksum = args.content_md5
    if args.body_file:
        checksum = content_md5(_read_file(args.body_file))

    print(credentials.signature_token(args.method, args.uri, args.date, checksum))
    return 0


def handle_check_compatibility() -> int:
    result = check_platform_compatibility()
    checks = ('md5_matches', 'sha1_matches', 'hmac_sha1_matches')
    print(f"cryptography {result['cryptography_version']} on {result['platform_info']['system']}")
    for check in checks:
        mark = "✓" if result[check] else "✗"
        print(f"  {mark} {check.replace('_matches', '')}")
    return 0 if all(result[check] for check in checks) else 1


def _log_level(verbosity: int) -> str:
    if verbosity >= 2:
        return "DEBUG"
    if verbosity == 1:
        return "INFO"
    return os.environ.get('UPYUN_LOG_LEVEL', 'WARNING')


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(LoggingConfig(level=_log_level(args.verbose)))

        if args.check_compatibility:
            return handle_check_compatibility()

        if args.command in DIGESTS or args.command == 'hmac-sha1':
            return handle_digest_command(args)
        elif args.command == 'sign':
            return handle_sign_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except UpyunSDKError as e:
        logger.debug(f"Command failed with {e.error_code}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())

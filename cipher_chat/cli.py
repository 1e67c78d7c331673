"""
Command-line entry point.

Usage:
    cipher-chat server 9000
    cipher-chat client 127.0.0.1:9000
"""

import argparse
import sys
from pydantic import ValidationError

from cipher_chat.client import CipherChatClient
from cipher_chat.server import CipherChatServer
from cipher_chat.common.config import ChatSettings
from cipher_chat.common.exceptions import CipherChatException
from cipher_chat.common.utils import parse_address


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: '{value}'")
    if not 0 <= port < 65536:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def _address(value: str):
    try:
        return parse_address(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cipher-chat",
        description="Two-party chat over a Diffie-Hellman keyed XOR stream cipher"
    )
    subparsers = parser.add_subparsers(dest="role", required=True)

    server = subparsers.add_parser("server", help="Listen on a port and display received messages")
    server.add_argument("port", type=_port, help="Port to listen on")

    client = subparsers.add_parser("client", help="Connect to a server and send lines from stdin")
    client.add_argument("address", type=_address, help="Server address as host:port")

    for sub in (server, client):
        sub.add_argument(
            "--framed", action="store_true", default=None,
            help="Length-prefix each message (both peers must agree)"
        )

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = ChatSettings.from_env(framed=args.framed)
        if args.role == "server":
            CipherChatServer(args.port, settings).start()
        else:
            host, port = args.address
            CipherChatClient(host, port, settings).start()
    except KeyboardInterrupt:
        print("\n[*] Interrupted")
        return 1
    except (CipherChatException, OSError, ValidationError) as e:
        print(f"[!] Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

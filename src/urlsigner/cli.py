#!/usr/bin/env python3
"""
cli.py — Command-line interface for urlsigner

Commands:
  sign          Print the URI with its signature parameter set
  validate      Check a signed URI (exit 0 if valid, 1 otherwise)
  canonicalize  Print the signing string of a URI

The key comes from --key, else --key-file, else $URLSIGNER_KEY.
"""

from __future__ import annotations
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import QueryOrder, SignerConfig
from .errors import MissingKeyError, UrlSignerError
from .signer import UrlSigner

KEY_ENV_VAR = "URLSIGNER_KEY"


def _fail_with_error(err: UrlSignerError) -> None:
    """Print a structured error message from a ``UrlSignerError`` and exit."""
    context = f" Context: {err.context}." if err.context else ""
    print(f"ERROR: {err.code}. {err.message}{context}", file=sys.stderr)
    sys.exit(1)


def _resolve_key(args: argparse.Namespace) -> str:
    """Pick the signing key from flags or the environment.

    Raises:
        MissingKeyError: If no source provides a key.
    """
    if args.key:
        return args.key
    if args.key_file:
        return Path(args.key_file).read_text(encoding="utf-8").rstrip("\r\n")
    key = os.environ.get(KEY_ENV_VAR, "")
    if not key:
        raise MissingKeyError(f"pass --key, --key-file or set {KEY_ENV_VAR}")
    return key


def _build_signer(args: argparse.Namespace) -> UrlSigner:
    order = QueryOrder.preserve() if args.no_order else QueryOrder.lexical()
    config = SignerConfig(
        key=_resolve_key(args),
        order=order,
        algorithm=args.algorithm,
        querystring_name=args.param,
    )
    return UrlSigner(config)


def cmd_sign(args: argparse.Namespace) -> None:
    """Handle ``urlsigner sign``."""
    print(_build_signer(args).sign(args.uri))


def cmd_validate(args: argparse.Namespace) -> None:
    """Handle ``urlsigner validate``; exit status carries the verdict."""
    if _build_signer(args).validate(args.uri):
        print("VALID")
        return
    print("INVALID")
    sys.exit(1)


def cmd_canonicalize(args: argparse.Namespace) -> None:
    """Handle ``urlsigner canonicalize``."""
    print(_build_signer(args).signing_string(args.uri))


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("uri", help="Absolute or relative URI")
    p.add_argument("--key", help=f"Signing key (default: ${KEY_ENV_VAR})")
    p.add_argument("--key-file", help="File whose contents are the signing key")
    p.add_argument("--algorithm", default="md5", help="HMAC hash algorithm (default: md5)")
    p.add_argument("--param", default="hash", help="Signature query parameter name")
    p.add_argument("--no-order", action="store_true",
                   help="Hash the query string as given instead of sorting parameters")


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(prog="urlsigner", description="HMAC URI signing CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    # sign
    p_sign = sub.add_parser("sign", help="Sign a URI")
    _add_common(p_sign)

    # validate
    p_validate = sub.add_parser("validate", help="Validate a signed URI")
    _add_common(p_validate)

    # canonicalize
    p_canon = sub.add_parser("canonicalize", help="Show the signing string of a URI")
    _add_common(p_canon)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "sign": cmd_sign(args)
        elif args.command == "validate": cmd_validate(args)
        elif args.command == "canonicalize": cmd_canonicalize(args)
    except UrlSignerError as err:
        _fail_with_error(err)

if __name__ == "__main__":
    main()

"""
ports.py — Default port lookup for URI schemes

Absolute URIs without an explicit port are signed with the default port of
their scheme, so ``http://example.com/`` and ``http://example.com:80/``
produce the same signing string.

Lookup order:
  1. DEFAULT_PORTS (IANA-registered ports for common URI schemes)
  2. the system services database (socket.getservbyname, TCP)
"""

from __future__ import annotations
import logging
import socket
from typing import Dict

from .errors import UnknownSchemeError

logger = logging.getLogger(__name__)

DEFAULT_PORTS: Dict[str, int] = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
    "ftps": 990,
    "sftp": 22,
    "ssh": 22,
    "telnet": 23,
    "smtp": 25,
    "gopher": 70,
    "pop3": 110,
    "pop3s": 995,
    "nntp": 119,
    "news": 119,
    "imap": 143,
    "imaps": 993,
    "snmp": 161,
    "ldap": 389,
    "ldaps": 636,
    "rtsp": 554,
    "ipp": 631,
    "rsync": 873,
    "nfs": 2049,
    "svn": 3690,
    "sip": 5060,
    "sips": 5061,
    "xmpp": 5222,
    "amqp": 5672,
    "amqps": 5671,
    "mqtt": 1883,
    "mysql": 3306,
    "postgres": 5432,
    "postgresql": 5432,
    "redis": 6379,
    "rediss": 6380,
    "git": 9418,
    "mongodb": 27017,
}


def default_port(scheme: str) -> int:
    """Return the default port for ``scheme`` (case-insensitive).

    Raises:
        UnknownSchemeError: If neither the table nor the system services
            database knows the scheme.
    """
    name = scheme.lower().rstrip(":")
    port = DEFAULT_PORTS.get(name)
    if port is not None:
        return port
    try:
        port = socket.getservbyname(name, "tcp")
    except OSError:
        raise UnknownSchemeError(f"scheme={name!r}") from None
    logger.debug("Resolved default port for %s from services database: %d", name, port)
    return port

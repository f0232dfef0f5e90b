import socket
import unittest.mock as mock

import pytest

from urlsigner.errors import UnknownSchemeError
from urlsigner.ports import DEFAULT_PORTS, default_port


@pytest.mark.parametrize("scheme, port", [
    ("http", 80),
    ("https", 443),
    ("ws", 80),
    ("wss", 443),
    ("ftp", 21),
    ("HTTPS", 443),
    ("https:", 443),
])
def test_table_lookup(scheme, port):
    assert default_port(scheme) == port


def test_table_wins_over_services_database():
    with mock.patch("urlsigner.ports.socket.getservbyname") as getserv:
        assert default_port("http") == 80
        assert not getserv.called


def test_falls_back_to_services_database():
    with mock.patch("urlsigner.ports.socket.getservbyname", return_value=4321) as getserv:
        assert default_port("myproto") == 4321
        getserv.assert_called_once_with("myproto", "tcp")


def test_unknown_scheme():
    with mock.patch("urlsigner.ports.socket.getservbyname", side_effect=OSError("not found")):
        with pytest.raises(UnknownSchemeError) as e:
            default_port("myproto")
    assert "myproto" in str(e.value)


def test_table_values_are_valid_ports():
    for scheme, port in DEFAULT_PORTS.items():
        assert scheme == scheme.lower()
        assert 0 < port < 65536

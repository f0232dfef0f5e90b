import hashlib
import hmac
import sys
import unittest.mock as mock

import pytest

from urlsigner.cli import _fail_with_error, main
from urlsigner.errors import UrlSignerError


def _md5_hex(key, message):
    return hmac.new(key.encode(), message.encode(), hashlib.md5).hexdigest()


@pytest.fixture(autouse=True)
def _no_env_key(monkeypatch):
    monkeypatch.delenv("URLSIGNER_KEY", raising=False)


def test_cli_main_help(capsys):
    with mock.patch.object(sys, "argv", ["urlsigner", "--help"]):
        with pytest.raises(SystemExit) as e:
            main()
        assert e.value.code == 0
        captured = capsys.readouterr()
        assert "HMAC URI signing CLI" in captured.out


def test_cli_main_sign_call():
    with mock.patch.object(sys, "argv", ["urlsigner", "sign", "/a?x=1", "--key", "K"]):
        with mock.patch("urlsigner.cli.cmd_sign") as mock_sign:
            main()
            assert mock_sign.called
            args = mock_sign.call_args[0][0]
            assert args.uri == "/a?x=1"
            assert args.key == "K"
            assert args.algorithm == "md5"
            assert args.param == "hash"
            assert args.no_order is False


def test_sign_prints_signed_uri(capsys):
    main(["sign", "http://example.com/foo?bar=baz&abc=123", "--key", "K"])
    out = capsys.readouterr().out.strip()
    digest = _md5_hex("K", "http://example.com:80/foo?abc=123&bar=baz")
    assert out == f"http://example.com/foo?bar=baz&abc=123&hash={digest}"


def test_validate_valid_and_invalid(capsys):
    main(["sign", "/foo?a=1", "--key", "K"])
    signed = capsys.readouterr().out.strip()

    main(["validate", signed, "--key", "K"])
    assert capsys.readouterr().out.strip() == "VALID"

    with pytest.raises(SystemExit) as e:
        main(["validate", signed, "--key", "other"])
    assert e.value.code == 1
    assert capsys.readouterr().out.strip() == "INVALID"


def test_canonicalize(capsys):
    main(["canonicalize", "/foo?bar=baz&abc=123", "--key", "K"])
    assert capsys.readouterr().out.strip() == "/foo?abc=123&bar=baz"


def test_canonicalize_no_order(capsys):
    main(["canonicalize", "/foo?bar=baz&abc=123", "--key", "K", "--no-order"])
    assert capsys.readouterr().out.strip() == "/foo?bar=baz&abc=123"


def test_custom_param_and_algorithm(capsys):
    main(["sign", "/a", "--key", "K", "--param", "sig", "--algorithm", "sha256"])
    expected = hmac.new(b"K", b"/a", hashlib.sha256).hexdigest()
    assert capsys.readouterr().out.strip() == f"/a?sig={expected}"


def test_key_from_file(tmp_path, capsys):
    key_file = tmp_path / "key.txt"
    key_file.write_text("K\n")
    main(["sign", "/a", "--key-file", str(key_file)])
    assert capsys.readouterr().out.strip() == f"/a?hash={_md5_hex('K', '/a')}"


def test_key_from_env(monkeypatch, capsys):
    monkeypatch.setenv("URLSIGNER_KEY", "K")
    main(["sign", "/a"])
    assert capsys.readouterr().out.strip() == f"/a?hash={_md5_hex('K', '/a')}"


def test_missing_key_exits(capsys):
    with pytest.raises(SystemExit) as e:
        main(["sign", "/a"])
    assert e.value.code == 1
    err = capsys.readouterr().err
    assert "URLSIGNER_E101" in err
    assert "URLSIGNER_KEY" in err


def test_unknown_scheme_exits(capsys):
    with pytest.raises(SystemExit) as e:
        main(["sign", "zzz-not-a-scheme://example.com/a", "--key", "K"])
    assert e.value.code == 1
    assert "URLSIGNER_E200" in capsys.readouterr().err


def test_fail_with_error(capsys):
    err = UrlSignerError(code="TEST_ERR", message="Test message.", context="test context")
    with pytest.raises(SystemExit) as e:
        _fail_with_error(err)
    assert e.value.code == 1
    captured = capsys.readouterr()
    assert "ERROR: TEST_ERR. Test message. Context: test context." in captured.err

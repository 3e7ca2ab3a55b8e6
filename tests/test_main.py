"""Tests for the ``python -m bunny_webhook`` entry point."""

from unittest.mock import patch

from bunny_webhook.__main__ import main


@patch("bunny_webhook.__main__.uvicorn")
def test_missing_group_name_is_fatal(mock_uvicorn, monkeypatch):
    monkeypatch.delenv("GROUP_NAME", raising=False)

    assert main() == 1
    mock_uvicorn.run.assert_not_called()


@patch("bunny_webhook.__main__.uvicorn")
def test_runs_server_with_tls_files(mock_uvicorn, monkeypatch):
    monkeypatch.setenv("GROUP_NAME", "acme.example.com")
    monkeypatch.setenv("PORT", "8443")
    monkeypatch.setenv("TLS_CERT_FILE", "/tls/tls.crt")
    monkeypatch.setenv("TLS_KEY_FILE", "/tls/tls.key")
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    assert main() == 0

    mock_uvicorn.run.assert_called_once()
    kwargs = mock_uvicorn.run.call_args.kwargs
    assert kwargs["port"] == 8443
    assert kwargs["ssl_certfile"] == "/tls/tls.crt"
    assert kwargs["ssl_keyfile"] == "/tls/tls.key"
    assert kwargs["log_level"] == "info"

"""Tests for the one-shot send CLI."""

import json

import pytest

from mailbridge.cli import send_once
from mailbridge.domain import Address
from mailbridge.infrastructure import Settings
from mailbridge.infrastructure.email import factory
from mailbridge.infrastructure.email.providers.loopback import LoopbackAdapter, LoopbackConfig


@pytest.fixture
def use_adapter(monkeypatch):
    def _use(adapter):
        monkeypatch.setattr(send_once.EmailAdapterFactory, "from_env", staticmethod(lambda: adapter))
        return adapter

    return _use


class TestParseAddress:
    def test_named(self):
        assert send_once.parse_address("Alice <alice@example.com>") == Address("alice@example.com", "Alice")

    def test_bare(self):
        assert send_once.parse_address(" bob@example.com ") == Address("bob@example.com")


class TestMain:
    def test_all_delivered(self, use_adapter, capsys, tmp_path):
        adapter = use_adapter(LoopbackAdapter())
        attachment = tmp_path / "notes.txt"
        attachment.write_text("hello")

        code = send_once.main(
            [
                "--from", "Reports <reports@example.com>",
                "--to", "a@example.com",
                "--to", "b@example.com",
                "--subject", "Hi",
                "--body", "Hello",
                "--attach", str(attachment),
            ]
        )

        assert code == 0
        report = json.loads(capsys.readouterr().out)
        assert report["deliveredTo"] == 2
        assert adapter.outbox[0].attachment_names == ("notes.txt",)

    def test_partial_failure_exit_code(self, use_adapter, capsys):
        use_adapter(LoopbackAdapter(LoopbackConfig(fail_recipients=frozenset({"b@example.com"}))))

        code = send_once.main(
            ["--from", "r@example.com", "--to", "a@example.com", "--to", "b@example.com", "--subject", "Hi", "--body", "x"]
        )

        assert code == 1
        report = json.loads(capsys.readouterr().out)
        assert report["results"][1]["error"] == "Rejected by loopback"

    def test_missing_attachment_file(self, use_adapter, tmp_path):
        use_adapter(LoopbackAdapter())

        code = send_once.main(
            [
                "--from", "r@example.com",
                "--to", "a@example.com",
                "--subject", "Hi",
                "--body", "x",
                "--attach", str(tmp_path / "missing.pdf"),
            ]
        )

        assert code == 2

    def test_unconfigured_provider(self, monkeypatch, capsys):
        monkeypatch.delenv("EMAIL_PROVIDER", raising=False)
        monkeypatch.setattr(factory, "get_settings", lambda: Settings(_env_file=None))

        code = send_once.main(["--from", "r@example.com", "--to", "a@example.com", "--subject", "Hi", "--body", "x"])

        assert code == 2
        assert capsys.readouterr().out == ""

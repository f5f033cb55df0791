"""Tests for the Mailgun adapter."""

import base64

import pytest

from conftest import FakeTransport
from mailbridge.application.ports.transport import FilePart, TransportResponse
from mailbridge.domain import Address, Attachment
from mailbridge.infrastructure.email.providers.mailgun import MailgunAdapter, MailgunConfig

QUEUED = TransportResponse(200, {"id": "<20240101@example.com>", "message": "Queued. Thank you."})


def adapter_with(*responses, batch=False, is_eu=False):
    transport = FakeTransport(*responses, default=QUEUED)
    config = MailgunConfig(api_key="key-123", domain="mg.example.com", is_eu=is_eu, send_in_batch=batch)
    return MailgunAdapter(config, transport), transport


class TestMailgunConfig:
    def test_region_selects_api_host(self):
        assert MailgunConfig(api_key="k", domain="mg.example.com").messages_url == (
            "https://api.mailgun.net/v3/mg.example.com/messages"
        )
        assert MailgunConfig(api_key="k", domain="mg.example.com", is_eu=True).messages_url == (
            "https://api.eu.mailgun.net/v3/mg.example.com/messages"
        )

    def test_blank_domain_rejected(self):
        with pytest.raises(ValueError):
            MailgunConfig(api_key="k", domain="  ")

    def test_config_is_immutable(self):
        config = MailgunConfig(api_key="k", domain="mg.example.com")
        with pytest.raises(Exception):
            config.is_eu = True


class TestMailgunRequests:
    def test_form_request(self, make_email):
        adapter, transport = adapter_with(is_eu=True)

        adapter.send(make_email(to=("a@example.com",)))

        call = transport.calls[0]
        assert call.url == "https://api.eu.mailgun.net/v3/mg.example.com/messages"
        assert call.headers["Authorization"] == "Basic " + base64.b64encode(b"api:key-123").decode()
        assert call.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert call.files is None
        assert call.body == {
            "to": "a@example.com",
            "from": "Reports<reports@example.com>",
            "subject": "Quarterly report",
            "text": "Numbers are up.",
            "html": None,
            "h:Reply-To": "Support<support@example.com>",
        }

    def test_batch_joins_recipients(self, make_email):
        adapter, transport = adapter_with(batch=True)

        adapter.send(make_email(to=("a@example.com", "b@example.com", "c@example.com")))

        assert len(transport.calls) == 1
        assert transport.calls[0].body["to"] == "a@example.com,b@example.com,c@example.com"

    def test_cc_and_bcc_strings(self, make_email):
        adapter, transport = adapter_with()

        adapter.send(
            make_email(
                to=("a@example.com",),
                cc=(Address("c@example.com", "Carol"), Address("e@example.com"), Address("", "Nobody")),
                bcc=(Address("d@example.com", "Dan"),),
                html=True,
            )
        )

        body = transport.calls[0].body
        assert body["cc"] == "Carol<c@example.com>,e@example.com"
        assert body["bcc"] == "Dan<d@example.com>"
        assert body["text"] is None
        assert body["html"] == "Numbers are up."

    def test_attachments_switch_to_multipart(self, make_email):
        adapter, transport = adapter_with()
        message = make_email(
            to=("a@example.com",),
            attachments=(
                Attachment(name="a.pdf", mime_type="application/pdf", content=b"%PDF"),
                Attachment(name="b.txt", mime_type="text/plain", content=b"b"),
            ),
        )

        adapter.send(message)

        call = transport.calls[0]
        assert "Content-Type" not in call.headers
        assert call.files == {
            "attachment[0]": FilePart(filename="a.pdf", content=b"%PDF", mime_type="application/pdf"),
            "attachment[1]": FilePart(filename="b.txt", content=b"b", mime_type="text/plain"),
        }


class TestMailgunOutcomes:
    def test_batch_whole_call_failure(self, make_email):
        adapter, _ = adapter_with(TransportResponse(400, {"message": "to parameter is not a valid address"}), batch=True)

        result = adapter.send(make_email(to=("a@example.com", "b@example.com")))

        assert [r.error for r in result.results] == ["to parameter is not a valid address"] * 2
        assert result.delivered_to == 0

    def test_server_errors_are_failures_too(self, make_email):
        adapter, _ = adapter_with(TransportResponse(503, "upstream unavailable"), batch=True)

        result = adapter.send(make_email(to=("a@example.com", "b@example.com")))

        assert result.recipients == ["a@example.com", "b@example.com"]
        assert [r.error for r in result.results] == ["upstream unavailable"] * 2

    def test_individual_mode_maps_each_call(self, make_email):
        adapter, _ = adapter_with(QUEUED, TransportResponse(404, {}))

        result = adapter.send(make_email(to=("a@example.com", "b@example.com")))

        assert [r.error for r in result.results] == ["", "Unknown error"]
        assert result.delivered_to == 1

import pytest

from components.configstore import TransmissionConfig
from components.maildispatcher import OutboundMessage, SmtpMailTransport
from components.maildispatcher import transport as smtp_transport
from components.maildispatcher.transport import build_email


class FakeSMTP:
    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.calls = []
        FakeSMTP.instances.append(self)

    async def __aenter__(self):
        self.calls.append("connect")
        return self

    async def __aexit__(self, *exc):
        self.calls.append("quit")

    async def login(self, user, password):
        self.calls.append(("login", user, password))

    async def send_message(self, msg):
        self.calls.append(("send", msg))


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(smtp_transport.aiosmtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def _settings(**overrides):
    base = dict(host="smtp.example.com", port=465, secure=True, user="a@b.com", password="p", fromEmail="a@b.com")
    base.update(overrides)
    return TransmissionConfig(**base)


MESSAGE = OutboundMessage(
    sender='"Ops" <a@b.com>', to="x@y.com", subject="Hi", html="<p>hi</p>", reply_to="a@b.com"
)


def test_build_email_headers_and_html_body():
    msg = build_email(MESSAGE)
    sender = msg["From"].addresses[0]
    assert sender.display_name == "Ops"
    assert sender.addr_spec == "a@b.com"
    assert b'From: "Ops" <a@b.com>' in bytes(msg)
    assert msg["To"] == "x@y.com"
    assert msg["Subject"] == "Hi"
    assert msg["Reply-To"] == "a@b.com"
    assert msg.get_content_type() == "text/html"
    assert "<p>hi</p>" in msg.get_content()


@pytest.mark.anyio
async def test_send_logs_in_and_sends(fake_smtp):
    await SmtpMailTransport(timeout=5).send(_settings(), MESSAGE)

    client = fake_smtp.instances[0]
    assert client.kwargs == {"hostname": "smtp.example.com", "port": 465, "use_tls": True, "timeout": 5}
    assert client.calls[0] == "connect"
    assert client.calls[1] == ("login", "a@b.com", "p")
    assert client.calls[2][0] == "send"
    assert client.calls[-1] == "quit"


@pytest.mark.anyio
async def test_verify_skips_login_without_user(fake_smtp):
    await SmtpMailTransport().verify(_settings(user="", secure=False, port=25))

    client = fake_smtp.instances[0]
    assert client.kwargs["use_tls"] is False
    assert client.calls == ["connect", "quit"]

import pytest

from components.authservice import PasswordHasher
from components.common.errors import ConfigMissingError, TransportError, ValidationError
from components.configstore import ConfigService, InMemoryBackend, OperatorStore
from components.configstore.contracts import SaveTransmissionRequest
from components.maildispatcher import MailDispatcher, SendMessageRequest


def make_dispatcher(transport, **smtp):
    store = OperatorStore(
        InMemoryBackend(),
        hasher=PasswordHasher(iterations=1_000),
        admin_email="admin@example.com",
        admin_password="changeme123",
    )
    config = ConfigService(store)
    if smtp:
        config.save_transmission_config(SaveTransmissionRequest(**smtp))
    return MailDispatcher(config, transport)


SMTP = dict(host="smtp.example.com", port=587, secure=False, user="a@b.com", password="p", fromEmail="a@b.com")


@pytest.mark.anyio
async def test_send_uses_defaults_and_real_secret(transport):
    dispatcher = make_dispatcher(transport, **SMTP)
    await dispatcher.send_message(SendMessageRequest(to="x@y.com", subject="Hi", body="<p>hi</p>"))

    settings, message = transport.sent[0]
    assert message.sender == "a@b.com"
    assert message.reply_to == "a@b.com"
    assert message.to == "x@y.com"
    assert message.html == "<p>hi</p>"
    assert settings.password == "p"
    assert settings.port == 587 and settings.secure is False


@pytest.mark.anyio
async def test_send_with_display_name_and_reply_to(transport):
    dispatcher = make_dispatcher(transport, **SMTP, fromName="Ops Team")
    await dispatcher.send_message(
        SendMessageRequest(to="x@y.com", subject="Hi", body="<p>hi</p>", replyTo="help@b.com")
    )
    _, message = transport.sent[0]
    assert message.sender == '"Ops Team" <a@b.com>'
    assert message.reply_to == "help@b.com"


@pytest.mark.anyio
async def test_send_requires_fields_and_config(transport):
    with pytest.raises(ValidationError):
        await make_dispatcher(transport, **SMTP).send_message(SendMessageRequest(to="x@y.com", subject="Hi"))

    with pytest.raises(ConfigMissingError):
        await make_dispatcher(transport).send_message(
            SendMessageRequest(to="x@y.com", subject="Hi", body="<p>hi</p>")
        )
    assert transport.sent == []


@pytest.mark.anyio
async def test_transport_failure_surfaces_cause(transport):
    transport.fail_with = ConnectionRefusedError("connection refused")
    dispatcher = make_dispatcher(transport, **SMTP)

    with pytest.raises(TransportError) as ex:
        await dispatcher.send_message(SendMessageRequest(to="x@y.com", subject="Hi", body="<p>hi</p>"))
    assert ex.value.message == "Failed to send email: connection refused"
    assert ex.value.status_code == 500


@pytest.mark.anyio
async def test_connection_check(transport):
    with pytest.raises(ConfigMissingError):
        await make_dispatcher(transport).test_connection()

    dispatcher = make_dispatcher(transport, **SMTP)
    await dispatcher.test_connection()
    assert transport.verified[0].password == "p"

    transport.fail_with = OSError("auth rejected")
    with pytest.raises(TransportError) as ex:
        await dispatcher.test_connection()
    assert ex.value.message == "SMTP connection failed: auth rejected"

import asyncio

import pytest

from authkit.app.services.mail import EMAIL_VERIFICATION, IMailSender, Mailer, redact_email
from tests.fixtures.fakes import RecordingMailSender


class SlowSender(IMailSender):
    async def send(self, to, template_id, variables):
        await asyncio.sleep(5)
        return True


class RefusingSender(IMailSender):
    async def send(self, to, template_id, variables):
        return False


@pytest.mark.asyncio
async def test_deliver_success():
    sender = RecordingMailSender()
    mailer = Mailer(sender)

    sent = await mailer.deliver("alice@example.com", EMAIL_VERIFICATION, {"first_name": "Alice"})

    assert sent is True
    assert sender.sent[0]["to"] == "alice@example.com"


@pytest.mark.asyncio
async def test_deliver_swallows_sender_exception(caplog):
    mailer = Mailer(RecordingMailSender(fail=True))

    sent = await mailer.deliver("alice@example.com", EMAIL_VERIFICATION, {})

    assert sent is False
    assert "alice@example.com" not in caplog.text


@pytest.mark.asyncio
async def test_deliver_gives_up_after_timeout():
    mailer = Mailer(SlowSender(), timeout_seconds=0.05)

    assert await mailer.deliver("alice@example.com", EMAIL_VERIFICATION, {}) is False


@pytest.mark.asyncio
async def test_deliver_reports_refused_message():
    mailer = Mailer(RefusingSender())

    assert await mailer.deliver("alice@example.com", EMAIL_VERIFICATION, {}) is False


def test_redact_email():
    assert redact_email("alice@example.com") == "al***@example.com"
    assert redact_email("nonsense") == "redacted"

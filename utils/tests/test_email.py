import pytest
from django.core import mail

from utils.email import default_from_address, redirect_addresses, send_mail


def test_send_mail_normal_mode(settings):
    settings.EMAIL_DEV_MODE = False
    send_mail("Weekly", "body", "noreply@club.test", ["ana@example.com"])
    assert mail.outbox[0].to == ["ana@example.com"]
    assert mail.outbox[0].subject == "Weekly"


def test_dev_mode_redirects_and_keeps_recipients_in_subject(settings):
    settings.EMAIL_DEV_MODE = True
    settings.EMAIL_DEV_MODE_REDIRECT_TO = "dev@club.test, qa@club.test"
    send_mail("Weekly", "body", "noreply@club.test", ["ana@example.com"])
    message = mail.outbox[0]
    assert message.to == ["dev@club.test", "qa@club.test"]
    assert message.subject == "[DEV MODE] Weekly (TO: ana@example.com)"


def test_dev_mode_keeps_html_alternative(settings):
    settings.EMAIL_DEV_MODE = True
    settings.EMAIL_DEV_MODE_REDIRECT_TO = "dev@club.test"
    send_mail(
        "Weekly",
        "body",
        "noreply@club.test",
        ["ana@example.com"],
        html_message="<p>body</p>",
    )
    message = mail.outbox[0]
    assert message.to == ["dev@club.test"]
    assert message.cc == []
    assert message.alternatives[0][1] == "text/html"


def test_redirect_addresses_skip_blanks(settings):
    settings.EMAIL_DEV_MODE_REDIRECT_TO = "dev@club.test, ,qa@club.test,"
    assert redirect_addresses() == ["dev@club.test", "qa@club.test"]


def test_dev_mode_truncates_long_recipient_lists(settings):
    settings.EMAIL_DEV_MODE = True
    settings.EMAIL_DEV_MODE_REDIRECT_TO = "dev@club.test"
    send_mail("Weekly", "body", "noreply@club.test", [f"p{i}@example.com" for i in range(5)])
    assert mail.outbox[0].subject.endswith("... and 2 more)")


def test_dev_mode_without_redirect_is_an_error(settings):
    settings.EMAIL_DEV_MODE = True
    settings.EMAIL_DEV_MODE_REDIRECT_TO = ""
    with pytest.raises(ValueError):
        send_mail("Weekly", "body", "noreply@club.test", ["ana@example.com"])
    assert mail.outbox == []


def test_default_from_address(settings):
    settings.DEFAULT_FROM_EMAIL = "Club <info@club.test>"
    assert default_from_address() == "noreply@club.test"


def test_default_from_address_falls_back_to_domain_hint(settings):
    settings.DEFAULT_FROM_EMAIL = ""
    assert default_from_address("aeroclub.org") == "noreply@aeroclub.org"
    assert default_from_address() == "noreply@aeroclub.local"

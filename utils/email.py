"""
Outgoing mail for club notifications.

With EMAIL_DEV_MODE on, nothing reaches the real recipients: messages go to
EMAIL_DEV_MODE_REDIRECT_TO instead and the subject says who they were for.
"""

from email.utils import parseaddr

from django.conf import settings
from django.core.mail import EmailMultiAlternatives

SUBJECT_RECIPIENT_LIMIT = 3


def redirect_addresses():
    """Addresses that receive every message while EMAIL_DEV_MODE is on."""
    raw = getattr(settings, "EMAIL_DEV_MODE_REDIRECT_TO", "") or ""
    return [address.strip() for address in raw.split(",") if address.strip()]


def _tag_subject(subject, recipients):
    shown = ", ".join(recipients[:SUBJECT_RECIPIENT_LIMIT]) or "no recipients"
    hidden = len(recipients) - SUBJECT_RECIPIENT_LIMIT
    if hidden > 0:
        shown += f", ... and {hidden} more"
    return f"[DEV MODE] {subject} (TO: {shown})"


def send_mail(subject, message, from_email, recipient_list, html_message=None):
    """
    Send a plain-text message with an optional HTML alternative.

    Returns the number of messages sent. Raises ValueError when dev mode is
    on without a redirect address, so no mail leaks out by mistake.
    """
    recipients = list(recipient_list)
    if getattr(settings, "EMAIL_DEV_MODE", False):
        redirect = redirect_addresses()
        if not redirect:
            raise ValueError(
                "EMAIL_DEV_MODE is on but EMAIL_DEV_MODE_REDIRECT_TO is empty."
            )
        subject = _tag_subject(subject, recipients)
        recipients = redirect

    email = EmailMultiAlternatives(
        subject=subject, body=message, from_email=from_email, to=recipients
    )
    if html_message:
        email.attach_alternative(html_message, "text/html")
    return email.send()


def default_from_address(domain_hint=None):
    """No-reply sender on DEFAULT_FROM_EMAIL's domain, else on domain_hint."""
    _, address = parseaddr(getattr(settings, "DEFAULT_FROM_EMAIL", "") or "")
    if "@" in address:
        domain = address.rsplit("@", 1)[1]
    else:
        domain = domain_hint or "aeroclub.local"
    return f"noreply@{domain}"

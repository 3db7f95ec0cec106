#!/usr/bin/env python3
"""
E-mail notification for new contact messages

Optional: only active when SMTP host, user and password are configured.
A failed send is logged and swallowed so the contact message is still saved.
"""

import html
import logging
import smtplib
from datetime import datetime
from email.message import EmailMessage
from typing import Dict

logger = logging.getLogger(__name__)


def smtp_configured(smtp: Dict) -> bool:
    return bool(smtp.get('host') and smtp.get('user') and smtp.get('password'))


def build_message(contact: Dict, smtp: Dict) -> EmailMessage:
    """HTML summary of one contact message, addressed to the admin"""
    msg = EmailMessage()
    msg['Subject'] = 'New Contact Form Submission - CineVerse'
    msg['From'] = smtp['user']
    msg['To'] = smtp.get('admin_email') or smtp['user']

    name = str(contact.get('name', ''))
    email = str(contact.get('email', ''))
    message = str(contact.get('message', ''))
    submitted = f"{datetime.now():%Y-%m-%d %H:%M:%S}"

    msg.set_content(
        f"New Contact Form Submission\n\n"
        f"Name: {name}\nEmail: {email}\n\nMessage:\n{message}\n\nSubmitted: {submitted}\n"
    )
    msg.add_alternative(
        "<h2>New Contact Form Submission</h2>"
        f"<p><strong>Name:</strong> {html.escape(name)}</p>"
        f"<p><strong>Email:</strong> {html.escape(email)}</p>"
        "<p><strong>Message:</strong></p>"
        f"<p>{html.escape(message)}</p>"
        f"<p><strong>Submitted:</strong> {submitted}</p>",
        subtype='html',
    )
    return msg


def send_contact_notification(contact: Dict, smtp: Dict) -> bool:
    """
    E-mail the admin about a new contact message

    Returns:
        True if sent, False if SMTP is not configured or sending failed
    """
    if not smtp_configured(smtp):
        logger.info("Email not configured - skipping email notification")
        return False

    msg = build_message(contact, smtp)
    try:
        with smtplib.SMTP(smtp['host'], int(smtp.get('port') or 587), timeout=10) as server:
            server.login(smtp['user'], smtp['password'])
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Error sending email notification: {e}")
        return False

    logger.info("Email notification sent successfully")
    return True

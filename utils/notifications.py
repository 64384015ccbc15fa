"""
Notifications Module - Telegram notifications to the site admin
"""

import threading
import requests
from flask import current_app
from markupsafe import escape


TELEGRAM_API_URL = 'https://api.telegram.org/bot{token}/sendMessage'


def get_admin_telegram_credentials():
    """Load admin Telegram settings from the app config; (None, None) when unset"""
    bot_token = current_app.config.get('ADMIN_TELEGRAM_BOT_TOKEN')
    chat_id = current_app.config.get('ADMIN_TELEGRAM_CHAT_ID')
    if not (bot_token and chat_id):
        return None, None
    return bot_token, chat_id


def _post_telegram(logger, url, payload):
    try:
        response = requests.post(url, json=payload, timeout=10)
        if response.status_code == 200:
            logger.info("Admin Telegram notification sent")
        else:
            logger.error(f"Telegram API error: {response.status_code}")
    except requests.RequestException as e:
        logger.error(f"Telegram notification error: {str(e)}")


def send_admin_notification(message_text):
    """
    Send a Telegram message to the admin on a background thread

    Returns:
        bool: True if a notification was dispatched, False when not configured
    """
    bot_token, chat_id = get_admin_telegram_credentials()
    if not (bot_token and chat_id):
        current_app.logger.debug("Admin Telegram credentials not configured")
        return False

    payload = {
        'chat_id': chat_id,
        'text': message_text,
        'parse_mode': 'HTML'
    }
    url = TELEGRAM_API_URL.format(token=bot_token)
    thread = threading.Thread(target=_post_telegram, args=(current_app.logger, url, payload))
    thread.daemon = True
    thread.start()
    return True


def notify_new_message(message):
    """Tell the admin about a new contact message"""
    body = str(escape(message.message))
    preview = f"{body[:200]}{'...' if len(body) > 200 else ''}"
    return send_admin_notification(
        f"📧 <b>New Portfolio Message</b>\n\n"
        f"👤 <b>From:</b> {escape(message.name)}\n"
        f"📧 <b>Email:</b> {escape(message.email)}\n"
        f"📌 <b>Subject:</b> {escape(message.subject or '-')}\n"
        f"💬 <b>Message:</b>\n{preview}"
    )

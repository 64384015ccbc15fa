"""
Messages Routes - Contact form submissions and the admin inbox
"""

from flask import jsonify, current_app
from schemas import MessageCreate, validate_payload
from utils import data
from utils.data import StorageError, RecordNotFound
from utils.decorators import admin_required
from utils.notifications import notify_new_message
from utils.security import check_rate_limit
from . import messages_bp


@messages_bp.route('', methods=['POST'])
def send_message():
    """Public contact form submission"""
    if not check_rate_limit('contact'):
        return jsonify({'message': 'Too many requests'}), 429

    payload = validate_payload(MessageCreate, 'Invalid message data')
    try:
        message = data.create_message(payload.model_dump())
    except StorageError:
        return jsonify({'message': 'Failed to send message'}), 500

    current_app.logger.info(f"Contact message saved, message_id: {message.id}")
    notify_new_message(message)
    return jsonify(message.to_dict()), 201


@messages_bp.route('', methods=['GET'])
@admin_required
def list_messages():
    try:
        messages = data.get_messages()
    except StorageError:
        return jsonify({'message': 'Failed to fetch messages'}), 500
    return jsonify([m.to_dict() for m in messages])


@messages_bp.route('/<message_id>/read', methods=['PUT'])
@admin_required
def mark_read(message_id):
    """Mark a message as read; repeating the call is harmless"""
    try:
        data.mark_message_read(message_id)
    except RecordNotFound:
        return jsonify({'message': 'Message not found'}), 404
    except StorageError:
        return jsonify({'message': 'Failed to mark message as read'}), 500
    return jsonify({'success': True, 'message': 'Message marked as read'})


@messages_bp.route('/<message_id>', methods=['DELETE'])
@admin_required
def delete_message(message_id):
    try:
        deleted = data.delete_message(message_id)
    except StorageError:
        return jsonify({'message': 'Failed to delete message'}), 500
    if deleted:
        current_app.logger.info(f"Deleted message {message_id} from DB")
    return jsonify({'success': True, 'message': 'Message deleted successfully'})

"""
Request Schemas - Validation of incoming JSON and form payloads

Each pydantic model describes one payload accepted by the API. Field names on
the wire are camelCase (``imageUrl``, ``readTime``); model attributes are
snake_case and map one-to-one onto the SQLAlchemy columns in ``models.py``.
"""

import re
from typing import List, Optional

from flask import request
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel


EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


class PayloadError(Exception):
    """Raised when a payload fails validation; rendered as a 400 response"""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self):
        return {'message': self.message, 'errors': self.errors}


def normalize_tags(value):
    """Convert a tag list or a comma-joined string into an ordered list of strings.

    Blank entries are dropped and surrounding whitespace is trimmed. Non-string
    list items are left in place so validation reports them.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(',')
    if isinstance(value, (list, tuple)):
        normalized = []
        for item in value:
            if isinstance(item, str):
                item = item.strip()
                if not item:
                    continue
            normalized.append(item)
        return normalized
    return value


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class _Payload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
        str_strip_whitespace=True,
    )


class ProjectCreate(_Payload):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    image_url: Optional[str] = Field(default=None, max_length=500)
    technologies: List[str] = Field(default_factory=list)
    github_url: Optional[str] = Field(default=None, max_length=500)
    live_url: Optional[str] = Field(default=None, max_length=500)
    featured: bool = False

    @field_validator('technologies', mode='before')
    @classmethod
    def normalize_technologies(cls, value):
        return normalize_tags(value)

    @field_validator('image_url', 'github_url', 'live_url', mode='before')
    @classmethod
    def blank_urls(cls, value):
        return _blank_to_none(value)


class ProjectUpdate(ProjectCreate):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    featured: Optional[bool] = None

    @field_validator('title', 'description', 'featured')
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError('Field may not be null')
        return value


class BlogCreate(_Payload):
    title: str = Field(min_length=1, max_length=255)
    excerpt: str = Field(min_length=1)
    content: str = Field(min_length=1)
    image_url: Optional[str] = Field(default=None, max_length=500)
    tags: List[str] = Field(default_factory=list)
    published: bool = False
    read_time: int = Field(default=5, gt=0)

    @field_validator('tags', mode='before')
    @classmethod
    def normalize_blog_tags(cls, value):
        return normalize_tags(value)

    @field_validator('image_url', mode='before')
    @classmethod
    def blank_image(cls, value):
        return _blank_to_none(value)


class BlogUpdate(BlogCreate):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    excerpt: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    published: Optional[bool] = None
    read_time: Optional[int] = Field(default=None, gt=0)

    @field_validator('title', 'excerpt', 'content', 'published', 'read_time')
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError('Field may not be null')
        return value


class MessageCreate(_Payload):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    subject: Optional[str] = Field(default=None, max_length=255)
    message: str = Field(min_length=1, max_length=5000)

    @field_validator('subject', mode='before')
    @classmethod
    def blank_subject(cls, value):
        return _blank_to_none(value)

    @field_validator('email')
    @classmethod
    def valid_email(cls, value):
        if not EMAIL_PATTERN.match(value):
            raise ValueError('Invalid email address')
        return value


class LoginRequest(_Payload):
    model_config = ConfigDict(str_strip_whitespace=False)

    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


def format_errors(exc):
    """Flatten a pydantic ValidationError into ``[{field, message}]``"""
    errors = []
    for error in exc.errors():
        field = '.'.join(str(part) for part in error.get('loc', ()))
        message = error.get('msg', 'Invalid value')
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
        errors.append({'field': field, 'message': message})
    return errors


def validate_payload(schema, message, data=None, strict=True):
    """Validate ``data`` (the JSON request body by default) against ``schema``.

    JSON bodies are validated strictly, so ``"yes"`` is not a bool and ``"7"``
    is not an int. HTML forms only carry strings and pass ``strict=False``.

    Raises:
        PayloadError: with field-level detail when validation fails
    """
    if data is None:
        data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise PayloadError(message, [{'field': '', 'message': 'Request body must be a JSON object'}])
    try:
        return schema.model_validate(data, strict=strict)
    except ValidationError as e:
        raise PayloadError(message, format_errors(e)) from e


__all__ = [
    'PayloadError',
    'ProjectCreate',
    'ProjectUpdate',
    'BlogCreate',
    'BlogUpdate',
    'MessageCreate',
    'LoginRequest',
    'normalize_tags',
    'format_errors',
    'validate_payload',
]

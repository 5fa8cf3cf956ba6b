"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class RegisterSchema(Schema):
    """Input payload for account registration."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    first_name = fields.String(load_default=None, validate=validate.Length(max=100))
    last_name = fields.String(load_default=None, validate=validate.Length(max=100))
    gender = fields.String(load_default=None, validate=validate.Length(max=20))
    dob = fields.Date(load_default=None)
    address = fields.String(load_default=None, validate=validate.Length(max=255))
    id_number = fields.String(load_default=None, validate=validate.Length(max=50))
    phone = fields.String(load_default=None, validate=validate.Length(max=30))


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class ResendSchema(Schema):
    """Input payload for re-sending the verification mail."""

    email = fields.Email(required=True, validate=validate.Length(max=254))


class RefreshSchema(Schema):
    """Optional body for refresh/logout when the client cannot send cookies."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(load_default=None)


class UserSchema(Schema):
    """Public representation of a user account."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    display_name = fields.String(dump_only=True)
    first_name = fields.String(allow_none=True)
    last_name = fields.String(allow_none=True)
    gender = fields.String(allow_none=True)
    dob = fields.Date(allow_none=True)
    address = fields.String(allow_none=True)
    id_number = fields.String(allow_none=True)
    phone = fields.String(allow_none=True)
    is_verified = fields.Boolean(required=True)
    created_at = fields.DateTime(allow_none=True)


class LoginUserSchema(Schema):
    """Profile fields returned alongside the login tokens."""

    email = fields.Email(dump_only=True)
    display_name = fields.String(dump_only=True)

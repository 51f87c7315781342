"""
Custom MongoEngine fields shared by the Hotel embedded documents.

MongoEngine's StringField neither trims nor lower-cases, and its errors do not
say which rule failed. These fields normalize values as they are assigned
(including values loaded from MongoDB) and raise the typed errors from
data.errors when validation fails.
"""
import datetime
import re

import mongoengine

from hotel_registry.data.errors import InvalidEnumValue, PatternMismatch, RequiredFieldMissing, REQUIRED_MESSAGE

PHONE_PATTERN = re.compile(r'^[+]?[\d\s\-()]+$')
EMAIL_PATTERN = re.compile(r'^\S+@\S+\.\S+$')


class TrimmedStringField(mongoengine.StringField):
    """StringField that strips surrounding whitespace and treats blank as missing."""

    def __set__(self, instance, value):
        if isinstance(value, str):
            value = value.strip()
        super().__set__(instance, value)

    def validate(self, value):
        if self.required and isinstance(value, str) and not value:
            raise RequiredFieldMissing(REQUIRED_MESSAGE, field_name=self.name)
        super().validate(value)


class PatternStringField(TrimmedStringField):
    pattern = None
    mismatch_message = '{value} does not match the expected format'

    def validate(self, value):
        super().validate(value)
        if value and not self.pattern.match(value):
            raise PatternMismatch(self.mismatch_message.format(value=value), field_name=self.name)


class PhoneField(PatternStringField):
    # Digits, whitespace, '-', parentheses and an optional leading '+'.
    pattern = PHONE_PATTERN
    mismatch_message = '{value} is not a valid phone number!'


class EmailAddressField(PatternStringField):
    pattern = EMAIL_PATTERN
    mismatch_message = 'Please enter a valid email address'

    def __set__(self, instance, value):
        if isinstance(value, str):
            value = value.lower()
        super().__set__(instance, value)


class ParsedDateTimeField(mongoengine.DateTimeField):
    """DateTimeField that stores strings and dates as datetimes once they parse.

    Unparseable values are kept as-is so validate() still rejects them.
    """

    def __set__(self, instance, value):
        if isinstance(value, (str, datetime.date)) and not isinstance(value, datetime.datetime):
            parsed = self.to_mongo(value)
            if isinstance(parsed, datetime.datetime):
                value = parsed
        super().__set__(instance, value)


class ClosedSetField(mongoengine.EnumField):
    """EnumField whose rejections (bad choice or bad value) are InvalidEnumValue."""

    def error(self, message='', errors=None, field_name=None):
        raise InvalidEnumValue(message, errors=errors, field_name=field_name or self.name)

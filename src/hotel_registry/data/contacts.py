"""
MongoEngine EmbeddedDocument with the public contact details of a hotel.
"""
import mongoengine

from hotel_registry.data.fields import EmailAddressField, PhoneField, TrimmedStringField


class ContactInfo(mongoengine.EmbeddedDocument):
    phone = PhoneField(required=True)        # e.g. '+1 (555) 123-4567'
    email = EmailAddressField(required=True)  # Stored lower-cased.
    website = TrimmedStringField(required=True)

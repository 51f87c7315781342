"""
MongoEngine EmbeddedDocument describing the person who owns a hotel.

The owner's account lives in the identity subsystem's User collection, not
here. This document only keeps a copy of the contact details plus the user's
id so hotels can be looked up per owner.
"""
import mongoengine

from hotel_registry.data.fields import EmailAddressField, PhoneField, TrimmedStringField

"""
Owner of a hotel, embedded in Hotel.

    Fields:
        user_id: ObjectId of the User in the identity subsystem (required).
        name: Owner's display name (required).
        email: Owner's email, lower-cased (required).
        phone: Owner's phone number (required).

    Notes:
    - ObjectIdField is used instead of ReferenceField: the User collection is
        owned elsewhere and nothing here dereferences or cascades to it.
"""
class Owner(mongoengine.EmbeddedDocument):
    user_id = mongoengine.ObjectIdField(required=True)
    name = TrimmedStringField(required=True)
    email = EmailAddressField(required=True)
    phone = PhoneField(required=True)

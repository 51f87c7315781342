"""
MongoEngine EmbeddedDocument holding a hotel's postal address.

Embedded inside Hotel; it has no _id and is never stored or referenced on its own.
"""
import mongoengine

from hotel_registry.data.fields import TrimmedStringField

"""
Postal address of a hotel.

    Fields:
        street, city, state, zip_code, country: all required. Values are
        trimmed on assignment, so a blank string counts as missing.

    Notes:
    - (city, state) is indexed as a pair on the hotels collection; see Hotel.meta.
"""
class Address(mongoengine.EmbeddedDocument):
    street = TrimmedStringField(required=True)
    city = TrimmedStringField(required=True)
    state = TrimmedStringField(required=True)
    zip_code = TrimmedStringField(required=True)
    country = TrimmedStringField(required=True)

    def __str__(self):
        return f'{self.street}, {self.city}, {self.state} {self.zip_code}, {self.country}'

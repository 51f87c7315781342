"""
MongoEngine model representing a hotel tenant of the booking platform.

Each Hotel document embeds its address, contact details, owner and
subscription. None of the embedded parts has an identity of its own.
"""
import datetime
import logging
from typing import Mapping, Optional, Union

import mongoengine

from hotel_registry.data.addresses import Address
from hotel_registry.data.contacts import ContactInfo
from hotel_registry.data.errors import HotelValidationError
from hotel_registry.data.fields import TrimmedStringField
from hotel_registry.data.owners import Owner
from hotel_registry.data.subscriptions import Subscription

log = logging.getLogger(__name__)

"""
Hotel document stored in the 'hotels' collection of the 'core' database alias.

Fields:
        name: Hotel name, trimmed (required, indexed).
        address: Embedded Address (required).
        contact_info: Embedded ContactInfo (required).
        owner: Embedded Owner with a weak reference to the User (required).
        subscription: Embedded Subscription (required).
        created_at: Set on the first save.
        updated_at: Set on every save.
"""
class Hotel(mongoengine.Document):
    name = TrimmedStringField(required=True)

    address = mongoengine.EmbeddedDocumentField(Address, required=True)
    contact_info = mongoengine.EmbeddedDocumentField(ContactInfo, required=True)
    owner = mongoengine.EmbeddedDocumentField(Owner, required=True)
    subscription = mongoengine.EmbeddedDocumentField(Subscription, required=True)

    # Maintained by save(), not by callers.
    created_at = mongoengine.DateTimeField()
    updated_at = mongoengine.DateTimeField()

    meta = {
        'db_alias': 'core',
        'collection': 'hotels',
        'indexes': [
            'name',
            'owner.user_id',
            'subscription.status',
            ('address.city', 'address.state'),
        ],
    }

    def is_subscription_active(self, now: Optional[datetime.datetime] = None) -> bool:
        return self.subscription.is_active(now or datetime.datetime.now())

    def days_until_expiration(self, now: Optional[datetime.datetime] = None) -> int:
        return self.subscription.days_until_expiration(now or datetime.datetime.now())

    """
    Recompute subscription.status from the subscription window.

    Only the status changes; plan and dates are left alone. The result depends
    on `now` and the dates alone, so calling this twice changes nothing.
    Records without a complete window are left for validate() to reject.
    """
    def normalize_before_save(self, now: Optional[datetime.datetime] = None) -> 'Hotel':
        sub = self.subscription
        if sub is None or not sub.has_window:
            return self

        status = sub.status_at(now or datetime.datetime.now())
        if sub.status != status:
            log.debug('Subscription of hotel %s moves from %s to %s', self.id, sub.status, status.value)
            sub.status = status

        return self

    def validate(self, clean=True):
        try:
            super().validate(clean=clean)
        except HotelValidationError:
            raise
        except mongoengine.ValidationError as error:
            raise HotelValidationError.from_error(error) from error

    """
    Normalize, stamp and persist the hotel.

    Every create and update goes through here, so the stored status always
    matches the window at the moment of the write. Invalid records raise
    HotelValidationError and nothing is written.
    """
    def save(self, *args, now: Optional[datetime.datetime] = None, **kwargs):
        now = now or datetime.datetime.now()

        self.normalize_before_save(now)
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now

        return super().save(*args, **kwargs)

    def __str__(self):
        return f'Hotel {self.name} in {self.address.city if self.address else "?"}'


"""
Build a Hotel from `candidate` and validate it without saving.

Parameters:
    candidate: A Hotel, or a mapping of field names to values where the
               embedded parts are nested mappings.

Returns:
    The validated Hotel, with strings trimmed and emails lower-cased.

Raises:
    HotelValidationError listing every offending field path.
"""
def validate_hotel(candidate: Union[Hotel, Mapping]) -> Hotel:
    hotel = candidate if isinstance(candidate, Hotel) else Hotel(**candidate)
    hotel.validate()
    return hotel

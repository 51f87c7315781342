from typing import Callable, List, Mapping, Optional

import datetime
import logging

import bson

from hotel_registry.data.addresses import Address
from hotel_registry.data.contacts import ContactInfo
from hotel_registry.data.errors import HotelValidationError, ReferenceUnresolved
from hotel_registry.data.hotels import Hotel
from hotel_registry.data.owners import Owner
from hotel_registry.data.subscriptions import Subscription, SubscriptionPlan, SubscriptionStatus

"""
Service-layer helpers for creating, querying and updating hotels.

Notes:
- Every write goes through Hotel.save(), which recomputes the subscription
  status and the timestamps before MongoEngine validates and stores the record.
- Datetimes are naive, matching what MongoDB returns. `now` parameters exist
  so callers (and tests) can pin the clock; they default to datetime.now().
- owner.user_id is only an id. Whether it names a real user is for the
  identity subsystem to say; pass `user_exists` to have it checked.
"""

log = logging.getLogger(__name__)

"""
Create and persist a new Hotel.

Parameters:
    name: Hotel name.
    address, contact_info, owner: Mappings with the embedded document fields
        (e.g. {'street': ..., 'city': ...}).
    plan: Subscription plan (SubscriptionPlan or its string value).
    start_date: Start of the subscription window.
    days: Length of the window in days.
    user_exists: Optional lookup into the identity subsystem. When given and
        it returns False for owner['user_id'], nothing is written.
    now: Clock used for the status and timestamps.

Returns:
    The newly created and persisted Hotel document.

Raises:
    ReferenceUnresolved: user_exists rejected the owner's user id.
    HotelValidationError: any field failed validation.
"""
def register_hotel(name: str, address: Mapping, contact_info: Mapping, owner: Mapping,
                   plan, start_date: datetime.datetime, days: int,
                   user_exists: Optional[Callable[[bson.ObjectId], bool]] = None,
                   now: Optional[datetime.datetime] = None) -> Hotel:
    hotel = Hotel()
    hotel.name = name
    hotel.address = Address(**address)
    hotel.contact_info = ContactInfo(**contact_info)
    hotel.owner = Owner(**owner)
    hotel.subscription = new_subscription(plan, start_date, days)

    if user_exists is not None and not user_exists(hotel.owner.user_id):
        log.warning('Rejected hotel %r: owner user %s does not exist', name, hotel.owner.user_id)
        raise ReferenceUnresolved(f'User {hotel.owner.user_id} does not exist.',
                                  field_path='owner.user_id', field_name='user_id')

    _save(hotel, now)
    log.info('Registered hotel %s (%s) for user %s', hotel.id, hotel.name, hotel.owner.user_id)

    return hotel


def new_subscription(plan, start_date: datetime.datetime, days: int) -> Subscription:
    subscription = Subscription()
    subscription.plan = _as_plan(plan)
    subscription.start_date = start_date
    subscription.end_date = start_date + datetime.timedelta(days=days)
    return subscription


def find_hotel_by_id(hotel_id) -> Optional[Hotel]:
    if not bson.ObjectId.is_valid(hotel_id):
        return None
    return Hotel.objects(id=hotel_id).first()


def find_hotels_by_name(name: str) -> List[Hotel]:
    return list(Hotel.objects(name=name.strip()))


"""
All hotels owned by the given user (uses the owner.user_id index).
"""
def find_hotels_for_owner(user_id: bson.ObjectId) -> List[Hotel]:
    query = Hotel.objects(owner__user_id=user_id).order_by('name')
    hotels = list(query)  # Force evaluation; materialize into list.

    return hotels


"""
Find the owner record (embedded copy) for an email address.

Returns:
    The Owner embedded in the first matching hotel, or None.
"""
def find_owner_by_email(email: str) -> Optional[Owner]:
    hotel = Hotel.objects(owner__email=email.strip().lower()).only('owner').first()
    return hotel.owner if hotel else None


def find_hotels_by_status(status) -> List[Hotel]:
    return list(Hotel.objects(subscription__status=_as_status(status)))


def find_hotels_in_city(city: str, state: str) -> List[Hotel]:
    query = Hotel.objects(address__city=city.strip(), address__state=state.strip())
    return list(query.order_by('name'))


"""
Replace the plan and window of a hotel's subscription and save it.

The status is not taken from the caller: it is recomputed from the new
window when the hotel is saved.

Returns:
    The refreshed Hotel document, or None if it was deleted meanwhile.
"""
def renew_subscription(hotel: Hotel, plan, start_date: datetime.datetime, days: int,
                       now: Optional[datetime.datetime] = None) -> Optional[Hotel]:
    # Re-fetch the hotel so we update the most recent state of the document.
    hotel_id = hotel.id
    hotel = Hotel.objects(id=hotel_id).first()
    if hotel is None:
        return _gone(hotel_id)

    hotel.subscription = new_subscription(plan, start_date, days)

    _save(hotel, now)
    log.info('Renewed %s subscription of hotel %s until %s (%s)',
             hotel.subscription.plan.value, hotel.id,
             hotel.subscription.end_date, hotel.subscription.status.value)

    return hotel


def update_contact_info(hotel: Hotel, phone: Optional[str] = None, email: Optional[str] = None,
                        website: Optional[str] = None, now: Optional[datetime.datetime] = None) -> Optional[Hotel]:
    hotel_id = hotel.id
    hotel = Hotel.objects(id=hotel_id).first()
    if hotel is None:
        return _gone(hotel_id)

    if phone is not None:
        hotel.contact_info.phone = phone
    if email is not None:
        hotel.contact_info.email = email
    if website is not None:
        hotel.contact_info.website = website

    _save(hotel, now)
    return hotel


"""
Hotels with an active subscription ending within `within_days` days.

The stored status is trusted for the server-side filter; the remaining days
are computed client-side since they depend on `now`.

Returns:
    Matching hotels, soonest expiry first.
"""
def find_expiring_hotels(within_days: int, now: Optional[datetime.datetime] = None) -> List[Hotel]:
    now = now or datetime.datetime.now()
    horizon = now + datetime.timedelta(days=within_days)

    query = Hotel.objects() \
        .filter(subscription__status=SubscriptionStatus.ACTIVE) \
        .filter(subscription__end_date__lte=horizon) \
        .order_by('subscription.end_date')

    return [
        h
        for h in query
        if h.is_subscription_active(now) and h.days_until_expiration(now) <= within_days
    ]


"""
Re-save every hotel whose stored status no longer matches its window.

Statuses only change on writes, so a subscription that ran out without its
hotel being touched still says 'active' until something saves it again.

Returns:
    How many hotels were corrected.
"""
def refresh_subscription_statuses(now: Optional[datetime.datetime] = None) -> int:
    now = now or datetime.datetime.now()

    changed = 0
    for hotel in Hotel.objects():
        if hotel.subscription.status_at(now) != hotel.subscription.status:
            _save(hotel, now)
            changed += 1

    log.info('Refreshed subscription statuses: %d hotel(s) changed', changed)
    return changed


def _save(hotel: Hotel, now: Optional[datetime.datetime]):
    try:
        hotel.save(now=now)
    except HotelValidationError as error:
        log.warning('Rejected write of hotel %r: %s', hotel.name, ', '.join(error.problems))
        raise


def _gone(hotel_id) -> None:
    log.warning('Hotel %s no longer exists; nothing saved', hotel_id)
    return None


def _as_plan(plan) -> SubscriptionPlan:
    # Unknown values are kept as-is so validation reports them as InvalidEnumValue.
    try:
        return SubscriptionPlan(plan)
    except ValueError:
        return plan


def _as_status(status) -> SubscriptionStatus:
    return SubscriptionStatus(status)

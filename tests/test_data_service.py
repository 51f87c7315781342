import datetime

import bson
import pytest

import hotel_registry.services.data_service as svc
from hotel_registry.data.errors import HotelValidationError, PatternMismatch, ReferenceUnresolved
from hotel_registry.data.hotels import Hotel
from hotel_registry.data.subscriptions import SubscriptionPlan, SubscriptionStatus

pytestmark = pytest.mark.usefixtures("db")

JAN_1 = datetime.datetime(2024, 1, 1)
JAN_5 = datetime.datetime(2024, 1, 5)


@pytest.fixture
def register(address, contact_info, owner):
    def _register(name="Seaside Inn", start_date=JAN_1, days=9, now=JAN_5, **overrides):
        kwargs = dict(address=address, contact_info=contact_info, owner=owner, plan="standard")
        kwargs.update(overrides)
        return svc.register_hotel(name, start_date=start_date, days=days, now=now, **kwargs)
    return _register


def test_register_hotel_persists_normalized_record(register, owner_id):
    hotel = register()

    stored = Hotel.objects(id=hotel.id).first()
    assert stored.name == "Seaside Inn"
    assert stored.contact_info.email == "front.desk@seaside.com"
    assert stored.owner.user_id == owner_id
    assert stored.subscription.plan == SubscriptionPlan.STANDARD
    assert stored.subscription.end_date == datetime.datetime(2024, 1, 10)
    assert stored.subscription.status == SubscriptionStatus.ACTIVE
    assert stored.created_at == JAN_5
    assert stored.updated_at == JAN_5


def test_register_future_subscription_is_trial(register):
    hotel = register(start_date=datetime.datetime(2024, 3, 1))

    assert hotel.subscription.status == SubscriptionStatus.TRIAL


def test_register_with_unknown_owner_writes_nothing(register):
    with pytest.raises(ReferenceUnresolved) as excinfo:
        register(user_exists=lambda user_id: False)

    assert excinfo.value.field_path == "owner.user_id"
    assert Hotel.objects.count() == 0


def test_register_checks_owner_with_lookup(register, owner_id):
    seen = []

    def user_exists(user_id):
        seen.append(user_id)
        return True

    register(user_exists=user_exists)

    assert seen == [owner_id]
    assert Hotel.objects.count() == 1


def test_register_invalid_hotel_writes_nothing(register, contact_info):
    contact_info["phone"] = "abc"

    with pytest.raises(HotelValidationError) as excinfo:
        register(plan="gold")

    assert isinstance(excinfo.value.problems["contact_info.phone"], PatternMismatch)
    assert "subscription.plan" in excinfo.value.problems
    assert Hotel.objects.count() == 0


def test_lookups(register, owner, owner_id, address):
    register(name="Seaside Inn")
    register(name="Harbor House")
    other = dict(owner, user_id=bson.ObjectId(), email="someone@else.com")
    register(name="Elsewhere", owner=other)
    address["city"] = "Orlando"
    register(name="Lakeside Lodge", start_date=datetime.datetime(2024, 6, 1))

    assert [h.name for h in svc.find_hotels_for_owner(owner_id)] == ["Harbor House", "Lakeside Lodge", "Seaside Inn"]
    assert [h.name for h in svc.find_hotels_in_city(" Miami", "FL")] == ["Elsewhere", "Harbor House", "Seaside Inn"]
    assert [h.name for h in svc.find_hotels_by_name(" Lakeside Lodge ")] == ["Lakeside Lodge"]
    assert [h.name for h in svc.find_hotels_by_status("trial")] == ["Lakeside Lodge"]
    assert len(svc.find_hotels_by_status(SubscriptionStatus.ACTIVE)) == 3


def test_find_owner_by_email_ignores_case(register, owner_id):
    register()

    owner = svc.find_owner_by_email("  JORDAN.LEE@example.com ")

    assert owner.user_id == owner_id
    assert owner.name == "Jordan Lee"
    assert svc.find_owner_by_email("nobody@example.com") is None


def test_find_hotel_by_id(register):
    hotel = register()

    assert svc.find_hotel_by_id(str(hotel.id)).name == "Seaside Inn"
    assert svc.find_hotel_by_id("not-an-id") is None
    assert svc.find_hotel_by_id(bson.ObjectId()) is None


def test_renew_expired_subscription(register):
    hotel = register()
    later = datetime.datetime(2024, 2, 1)
    svc.refresh_subscription_statuses(later)

    renewed = svc.renew_subscription(hotel, "premium", later, 30, now=later)

    stored = Hotel.objects(id=hotel.id).first()
    assert renewed.subscription.status == SubscriptionStatus.ACTIVE
    assert stored.subscription.plan == SubscriptionPlan.PREMIUM
    assert stored.subscription.end_date == datetime.datetime(2024, 3, 2)
    assert stored.created_at == JAN_5
    assert stored.updated_at == later


def test_update_contact_info(register):
    hotel = register()

    svc.update_contact_info(hotel, email="Reservations@Seaside.com", now=datetime.datetime(2024, 1, 6))

    stored = Hotel.objects(id=hotel.id).first()
    assert stored.contact_info.email == "reservations@seaside.com"
    assert stored.contact_info.phone == "+1 (305) 555-0100"
    assert stored.updated_at == datetime.datetime(2024, 1, 6)


def test_update_contact_info_rejects_bad_phone(register):
    hotel = register()

    with pytest.raises(HotelValidationError):
        svc.update_contact_info(hotel, phone="call the front desk")

    assert Hotel.objects(id=hotel.id).first().contact_info.phone == "+1 (305) 555-0100"


def test_refresh_subscription_statuses(register):
    short = register(name="Short Stay", days=9)
    long = register(name="Long Stay", days=90)

    changed = svc.refresh_subscription_statuses(datetime.datetime(2024, 1, 20))

    assert changed == 1
    assert Hotel.objects(id=short.id).first().subscription.status == SubscriptionStatus.EXPIRED
    assert Hotel.objects(id=long.id).first().subscription.status == SubscriptionStatus.ACTIVE
    assert svc.refresh_subscription_statuses(datetime.datetime(2024, 1, 20)) == 0


def test_find_expiring_hotels(register):
    register(name="Short Stay", days=9)
    register(name="Long Stay", days=90)
    register(name="Not Started", start_date=datetime.datetime(2024, 1, 8), days=3)

    expiring = svc.find_expiring_hotels(7, now=JAN_5)

    assert [h.name for h in expiring] == ["Short Stay"]


def test_hotel_with_string_dates_saves(hotel_data):
    hotel_data["subscription"]["start_date"] = "2024-01-01T00:00:00"
    hotel_data["subscription"]["end_date"] = "2024-01-10"

    Hotel(**hotel_data).save(now=JAN_5)

    stored = Hotel.objects(name="Seaside Inn").first()
    assert stored.subscription.start_date == JAN_1
    assert stored.subscription.end_date == datetime.datetime(2024, 1, 10)
    assert stored.subscription.status == SubscriptionStatus.ACTIVE


def test_hotel_with_unparseable_date_is_rejected_on_save(hotel_data):
    hotel_data["subscription"]["end_date"] = "next spring"

    with pytest.raises(HotelValidationError) as excinfo:
        Hotel(**hotel_data).save(now=JAN_5)

    assert "subscription.end_date" in excinfo.value.problems
    assert Hotel.objects.count() == 0


def test_renew_deleted_hotel_returns_none(register):
    hotel = register()
    Hotel.objects(id=hotel.id).delete()

    assert svc.renew_subscription(hotel, "premium", JAN_5, 30, now=JAN_5) is None
    assert Hotel.objects.count() == 0


def test_update_contact_info_of_deleted_hotel_returns_none(register):
    hotel = register()
    Hotel.objects(id=hotel.id).delete()

    assert svc.update_contact_info(hotel, website="https://gone.example") is None
    assert Hotel.objects.count() == 0

import datetime

import bson
import mongomock
import pytest

import hotel_registry.data.mongo_setup as mongo_setup
import hotel_registry.infrastructure.state as state


@pytest.fixture
def db():
    """In-memory MongoDB bound to the 'core' alias for the duration of a test."""
    mongo_setup.global_init(db_name="hotel_registry_test", mongo_client_class=mongomock.MongoClient)
    yield
    mongo_setup.global_close()


@pytest.fixture
def no_owner(monkeypatch):
    monkeypatch.setattr(state, "active_owner", None)


@pytest.fixture
def owner_id():
    return bson.ObjectId()


@pytest.fixture
def address():
    return {
        "street": " 1 Ocean Drive ",
        "city": "Miami",
        "state": "FL",
        "zip_code": "33139",
        "country": "USA",
    }


@pytest.fixture
def contact_info():
    return {
        "phone": "+1 (305) 555-0100",
        "email": "Front.Desk@Seaside.com",
        "website": "https://seaside.example",
    }


@pytest.fixture
def owner(owner_id):
    return {
        "user_id": owner_id,
        "name": "Jordan Lee",
        "email": "Jordan.Lee@Example.com",
        "phone": "555-0100",
    }


@pytest.fixture
def hotel_data(address, contact_info, owner):
    return {
        "name": "  Seaside Inn ",
        "address": address,
        "contact_info": contact_info,
        "owner": owner,
        "subscription": {
            "plan": "standard",
            "start_date": datetime.datetime(2024, 1, 1),
            "end_date": datetime.datetime(2024, 1, 10),
        },
    }

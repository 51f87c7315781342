import datetime
from typing import Optional

import bson
from colorama import Fore
from dateutil import parser
from switchlang import switch

import hotel_registry.infrastructure.state as state
import hotel_registry.services.data_service as svc
from hotel_registry.data.errors import HotelFieldError, HotelValidationError
from hotel_registry.data.hotels import Hotel
from hotel_registry.infrastructure.settings import settings


"""
Owner-facing console workflow.

This module provides the interactive command loop and actions for owners:
- Registering hotels and logging in by owner email.
- Listing hotels with their subscription state.
- Renewing subscriptions and updating contact details.
- Reviewing subscriptions that are about to expire.

Conventions:
- Uses switchlang.switch for a case-like control flow pattern.
- Uses infrastructure.state.active_owner to determine who is logged in.
- Delegates persistence, validation, and querying to services.data_service (svc).
- Validation failures are printed per field, never raised to the user.
"""

"""
Entry point for the owner workflow loop.

Prints a banner and available commands, then processes user input in a loop
until the user exits the app.
"""
def run():
    print(' ****************** Welcome hotel owner **************** ')
    print()

    show_commands()

    while True:
        action = get_action()

        with switch(action) as s:
            s.case('r', register_hotel)
            s.case('l', log_into_account)
            s.case('y', list_hotels)
            s.case('n', renew_subscription)
            s.case('c', update_contact_info)
            s.case('e', view_expiring)
            s.case('f', refresh_statuses)
            s.case(['x', 'bye', 'exit', 'exit()'], exit_app)
            s.case('?', show_commands)
            s.case('', lambda: None)  # No-op for empty input.
            s.default(unknown_command)

        state.reload_owner()

        if action:
            print()


def show_commands():
    print('What action would you like to take:')
    print('[R]egister a hotel')
    print('[L]ogin with your owner email')
    print('List [y]our hotels')
    print('Re[n]ew a subscription')
    print('Update [c]ontact info of a hotel')
    print('Show [e]xpiring subscriptions')
    print('Re[f]resh subscription statuses')
    print('e[X]it app')
    print('[?] Help (this info)')
    print()


"""
Collect hotel, owner and subscription details and register the hotel.

When an owner is logged in their details are reused; otherwise they are
prompted for and the owner is logged in afterwards.
"""
def register_hotel():
    print(' ****************** REGISTER HOTEL **************** ')

    name = input('What is the name of the hotel? ')
    if not name.strip():
        error_msg('Cancelled')
        return

    address = {
        'street': input('Street: '),
        'city': input('City: '),
        'state': input('State: '),
        'zip_code': input('Zip code: '),
        'country': input('Country: '),
    }
    contact_info = {
        'phone': input('Hotel phone: '),
        'email': input('Hotel email: '),
        'website': input('Hotel website: '),
    }

    if state.active_owner:
        owner = {name: state.active_owner[name] for name in ('user_id', 'name', 'email', 'phone')}
    else:
        user_id = _read_user_id()
        if user_id is None:
            return
        owner = {
            'user_id': user_id,
            'name': input('What is your name? '),
            'email': input('What is your email? '),
            'phone': input('What is your phone number? '),
        }

    plan = input('Which plan [basic, standard, premium]? ').strip().lower() or 'basic'
    start_date = _read_date('Subscription start [yyyy-mm-dd, empty for today]: ')
    if start_date is None:
        return
    days = _read_int('How many days does the subscription run? ')
    if days is None:
        return

    try:
        hotel = svc.register_hotel(name, address, contact_info, owner, plan, start_date, days)
    except HotelValidationError as error:
        validation_error_msg(error)
        return
    except HotelFieldError as error:
        error_msg(f'ERROR: {error.field_path}: {error}')
        return

    state.active_owner = hotel.owner
    success_msg(f'Registered hotel {hotel.name} with id {hotel.id} ({hotel.subscription.status.value}).')


def log_into_account():
    print(' ****************** LOGIN **************** ')

    email = input('What is your email? ').strip().lower()
    owner = svc.find_owner_by_email(email)

    if not owner:
        error_msg(f'Could not find any hotel owned by {email}.')
        return

    state.active_owner = owner
    success_msg(f'Logged in as {owner.name}.')


"""
List all hotels of the logged-in owner with their subscription state.

Parameters:
- suppress_header: When True, omits the banner (used when picking a hotel
    inside other flows).
"""
def list_hotels(suppress_header=False):
    if not suppress_header:
        print(' ******************     Your hotels     **************** ')

    if not state.active_owner:
        error_msg('You must login first to list your hotels.')
        return []

    now = datetime.datetime.now()
    hotels = svc.find_hotels_for_owner(state.active_owner.user_id)
    print(f"You have {len(hotels)} hotels.")
    for idx, h in enumerate(hotels):
        sub = h.subscription
        print(f' {idx + 1}. {h.name} in {h.address.city}, {h.address.state}.')
        print('      * {} plan, {}, {} days left, active? {}'.format(
            sub.plan.value,
            sub.status.value,
            h.days_until_expiration(now),
            'YES' if h.is_subscription_active(now) else 'no'
        ))

    return hotels


def renew_subscription():
    print(' ****************** Renew subscription **************** ')

    hotel = select_hotel()
    if not hotel:
        return

    plan = input(f'Which plan [basic, standard, premium] (now {hotel.subscription.plan.value})? ').strip().lower()
    start_date = _read_date('New start date [yyyy-mm-dd, empty for today]: ')
    if start_date is None:
        return
    days = _read_int('How many days? ')
    if days is None:
        return

    try:
        hotel = svc.renew_subscription(hotel, plan or hotel.subscription.plan, start_date, days)
    except HotelValidationError as error:
        validation_error_msg(error)
        return

    if hotel is None:
        error_msg('That hotel no longer exists.')
        return

    success_msg(f'Subscription of {hotel.name} runs until {hotel.subscription.end_date.date()} '
                f'({hotel.subscription.status.value}).')


def update_contact_info():
    print(' ****************** Update contact info **************** ')

    hotel = select_hotel()
    if not hotel:
        return

    print('Leave a value empty to keep it.')
    phone = input(f'Phone [{hotel.contact_info.phone}]: ').strip() or None
    email = input(f'Email [{hotel.contact_info.email}]: ').strip() or None
    website = input(f'Website [{hotel.contact_info.website}]: ').strip() or None

    try:
        updated = svc.update_contact_info(hotel, phone=phone, email=email, website=website)
    except HotelValidationError as error:
        validation_error_msg(error)
        return

    if updated is None:
        error_msg('That hotel no longer exists.')
        return

    success_msg(f'Contact info of {hotel.name} updated.')


def view_expiring():
    print(' ****************** Expiring subscriptions **************** ')

    now = datetime.datetime.now()
    hotels = svc.find_expiring_hotels(settings.EXPIRY_WARNING_DAYS, now)
    if state.active_owner:
        hotels = [h for h in hotels if h.owner.user_id == state.active_owner.user_id]

    print(f"{len(hotels)} subscriptions end within {settings.EXPIRY_WARNING_DAYS} days.")
    for h in hotels:
        print(f' * {h.name}: {h.subscription.plan.value} plan ends {h.subscription.end_date.date()}, '
              f'{h.days_until_expiration(now)} days left.')


def refresh_statuses():
    changed = svc.refresh_subscription_statuses()
    success_msg(f'Updated the status of {changed} hotel(s).')


def select_hotel() -> Optional[Hotel]:
    if not state.active_owner:
        error_msg('You must login first.')
        return None

    hotels = list_hotels(suppress_header=True)
    if not hotels:
        return None

    hotel_number = input('Enter hotel number: ').strip()
    if not hotel_number:
        error_msg('Cancelled')
        return None
    if not hotel_number.isdigit():
        error_msg(f'There is no hotel number {hotel_number}.')
        return None

    idx = int(hotel_number) - 1
    if not 0 <= idx < len(hotels):
        error_msg(f'There is no hotel number {hotel_number}.')
        return None

    selected = hotels[idx]
    success_msg(f'Selected hotel {selected.name}')
    return selected


def exit_app():
    print()
    print('bye')
    raise KeyboardInterrupt()


def get_action():
    text = '> '
    if state.active_owner:
        text = f'{state.active_owner.name}> '

    action = input(Fore.YELLOW + text + Fore.WHITE)
    return action.strip().lower()


def unknown_command():
    print("Sorry we didn't understand that command.")


def success_msg(text):
    print(Fore.LIGHTGREEN_EX + text + Fore.WHITE)


def error_msg(text):
    print(Fore.LIGHTRED_EX + text + Fore.WHITE)


def validation_error_msg(error: HotelValidationError):
    error_msg('ERROR: the hotel was not saved.')
    for path, problem in error.problems.items():
        error_msg(f'  {path}: {problem}')


# Blank input means a brand-new user id; the identity subsystem owns the users.
def _read_user_id():
    text = input('Your user id [empty for a new one]: ').strip()
    if not text:
        return bson.ObjectId()
    if not bson.ObjectId.is_valid(text):
        error_msg(f'{text} is not a valid user id.')
        return None
    return bson.ObjectId(text)


def _read_int(prompt) -> Optional[int]:
    text = input(prompt).strip()
    try:
        return int(text)
    except ValueError:
        error_msg(f'{text} is not a whole number.')
        return None


def _read_date(prompt) -> Optional[datetime.datetime]:
    text = input(prompt).strip()
    if not text:
        return datetime.datetime.combine(datetime.date.today(), datetime.time())

    try:
        return parser.parse(text)
    except (ValueError, OverflowError):
        error_msg(f'{text} is not a date.')
        return None

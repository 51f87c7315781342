"""Process-wide console state.

Exposes:
- active_owner: Optional[Owner] - the owner logged into the console (or None).
- reload_owner(): Refresh active_owner from persistence using the email as the lookup key.
"""

from typing import Optional

from hotel_registry.data.owners import Owner
import hotel_registry.services.data_service as svc

# Owner details as embedded in their hotels; None before login.
active_owner: Optional[Owner] = None

"""Refresh the global active_owner from the database, if one is set.

    If none of the owner's hotels carry that email any more, active_owner
    becomes None.
"""
def reload_owner():
    global active_owner
    if not active_owner:
        return

    active_owner = svc.find_owner_by_email(active_owner.email)

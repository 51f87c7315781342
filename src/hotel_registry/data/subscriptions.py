"""
MongoEngine EmbeddedDocument for a hotel's subscription to the platform.

A subscription is a plan plus a date window. Its status is derived from the
window every time the owning Hotel is saved (see Subscription.status_at).
"""
import datetime
import enum
import math

import mongoengine

from hotel_registry.data.fields import ClosedSetField, ParsedDateTimeField


class SubscriptionPlan(str, enum.Enum):
    BASIC = 'basic'
    STANDARD = 'standard'
    PREMIUM = 'premium'


class SubscriptionStatus(str, enum.Enum):
    ACTIVE = 'active'
    EXPIRED = 'expired'
    TRIAL = 'trial'


ONE_DAY = datetime.timedelta(days=1)

"""
Plan and date window of a hotel subscription.

    Fields:
        plan: One of SubscriptionPlan (default basic).
        start_date: First instant of the window (required).
        end_date: End of the window (required).
        status: One of SubscriptionStatus (default trial). Recomputed from the
                dates on every save of the owning Hotel.

    Notes:
    - Dates are naive datetimes, like everything MongoDB hands back. Pass
        naive values for `now` too or the comparisons below raise TypeError.
"""
class Subscription(mongoengine.EmbeddedDocument):
    plan = ClosedSetField(SubscriptionPlan, required=True, default=SubscriptionPlan.BASIC)
    start_date = ParsedDateTimeField(required=True)
    end_date = ParsedDateTimeField(required=True)
    status = ClosedSetField(SubscriptionStatus, required=True, default=SubscriptionStatus.TRIAL)

    """
    Status the window implies at `now`, ignoring the stored status.

    Before the window -> trial, after it -> expired, inside it (both ends
    included) -> active.
    """
    def status_at(self, now: datetime.datetime) -> SubscriptionStatus:
        if now < self.start_date:
            return SubscriptionStatus.TRIAL
        if now > self.end_date:
            return SubscriptionStatus.EXPIRED
        return SubscriptionStatus.ACTIVE

    # The window here is half-open: at exactly end_date this is False even
    # though status_at() still reports active.
    def is_active(self, now: datetime.datetime) -> bool:
        return (
            self.status == SubscriptionStatus.ACTIVE and
            self.start_date <= now < self.end_date
        )

    """
    Whole days left until end_date, counting a partial day as a full one.

    Returns 0 once end_date has been reached; never negative.
    """
    def days_until_expiration(self, now: datetime.datetime) -> int:
        if now > self.end_date:
            return 0

        remaining = self.end_date - now
        return math.ceil(remaining / ONE_DAY)

    @property
    def has_window(self):
        # Unparseable dates stay strings until validate() rejects them.
        return (
            isinstance(self.start_date, datetime.datetime) and
            isinstance(self.end_date, datetime.datetime)
        )

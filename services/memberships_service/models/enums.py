"""Enums for the Memberships Service.

The wizard data model uses the same enums, so the values here are the wire
values the dashboard sends.
"""

import enum


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class MembershipStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class MembershipType(str, enum.Enum):
    STANDARD = "standard"
    TRIAL = "trial"
    PUNCHCARD = "punchcard"


class ChargeSignUpFee(str, enum.Enum):
    AT_REGISTRATION = "at-registration"
    FIRST_PAYMENT = "first-payment"


class PaymentFrequency(str, enum.Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    ANNUALLY = "annually"


class StartDateOption(str, enum.Enum):
    SAME_AS_REGISTRATION = "same-as-registration"
    CUSTOM = "custom"


class ContractLength(str, enum.Enum):
    MONTH_TO_MONTH = "month-to-month"
    THREE_MONTHS = "3-months"
    SIX_MONTHS = "6-months"
    TWELVE_MONTHS = "12-months"


class AutoRenewal(str, enum.Enum):
    NONE = "none"
    MONTH_TO_MONTH = "month-to-month"
    SAME_TERM = "same-term"


class MemberStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class MemberMembershipStatus(str, enum.Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    CONVERTED = "converted"


class BillingType(str, enum.Enum):
    AUTOPAY = "autopay"
    ONE_TIME = "one-time"

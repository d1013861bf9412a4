"""Display labels for a membership, as shown on the memberships page card."""

from typing import Optional

from pydantic import BaseModel
from services.memberships_service.models.enums import (
    ContractLength,
    MembershipStatus,
    MembershipType,
    PaymentFrequency,
)
from services.memberships_service.wizard.data import WizardData

FREQUENCY_LABELS = {
    PaymentFrequency.MONTHLY: "Monthly",
    PaymentFrequency.WEEKLY: "Weekly",
    PaymentFrequency.ANNUALLY: "Annually",
}

_PERIOD_SUFFIXES = {
    PaymentFrequency.MONTHLY: "mo",
    PaymentFrequency.WEEKLY: "wk",
    PaymentFrequency.ANNUALLY: "yr",
}

CONTRACT_LABELS = {
    ContractLength.MONTH_TO_MONTH: "Month-to-Month",
    ContractLength.THREE_MONTHS: "3 Months",
    ContractLength.SIX_MONTHS: "6 Months",
    ContractLength.TWELVE_MONTHS: "12 Months",
}

CATEGORY_LABELS = {
    MembershipType.STANDARD: "Standard Membership",
    MembershipType.TRIAL: "Trial Membership",
    MembershipType.PUNCHCARD: "Punchcard Membership",
}


class MembershipSummary(BaseModel):
    name: str
    category: str
    status: str
    is_trial: bool
    is_monthly: bool
    price: str
    signup_fee: str
    frequency: str
    contract: str
    access: str


def format_money(amount: float) -> str:
    return f"${amount:,.2f}"


def format_price(data: WizardData) -> str:
    if data.membership_type == MembershipType.PUNCHCARD:
        if not data.punchcard_price:
            return "Free"
        return format_money(data.punchcard_price)
    if data.membership_type == MembershipType.TRIAL or not data.monthly_fee:
        return "Free"
    return f"{format_money(data.monthly_fee)}/{_PERIOD_SUFFIXES[data.payment_frequency]}"


def format_signup_fee(fee: Optional[float]) -> str:
    if not fee:
        return "No signup fee"
    return f"{format_money(fee)} signup fee"


def format_access(data: WizardData) -> str:
    if data.membership_type == MembershipType.PUNCHCARD and data.classes_included:
        noun = "Class" if data.classes_included == 1 else "Classes"
        return f"{data.classes_included} {noun} Total"
    return "Unlimited"


def build_summary(data: WizardData) -> MembershipSummary:
    return MembershipSummary(
        name=data.membership_name.strip(),
        category=CATEGORY_LABELS[data.membership_type],
        status="Active" if data.status == MembershipStatus.ACTIVE else "Inactive",
        is_trial=data.membership_type == MembershipType.TRIAL,
        is_monthly=data.payment_frequency == PaymentFrequency.MONTHLY,
        price=format_price(data),
        signup_fee=format_signup_fee(data.sign_up_fee),
        frequency=FREQUENCY_LABELS[data.payment_frequency],
        contract=CONTRACT_LABELS[data.contract_length],
        access=format_access(data),
    )

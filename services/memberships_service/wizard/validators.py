"""Per-step gates deciding whether the wizard's Next/submit action is enabled.

Every function here is pure: it reads ``WizardData`` and returns a bool.
"""

from datetime import date
from typing import Callable, Optional

from services.memberships_service.models.enums import MembershipType, StartDateOption
from services.memberships_service.wizard.data import WizardData
from services.memberships_service.wizard.steps import STEP_ORDER, WizardStep


def is_basics_step_valid(data: WizardData) -> bool:
    return data.membership_name.strip() != ""


def is_program_association_step_valid(data: WizardData) -> bool:
    # The waiver is required, not optional.
    return bool(data.associated_program_id) and bool(data.associated_waiver_id)


def is_payment_step_valid(data: WizardData) -> bool:
    """Trial memberships may be free; everything else needs a fee of 0 or more."""
    if data.membership_type == MembershipType.TRIAL:
        return True
    return data.monthly_fee is not None and data.monthly_fee >= 0


def is_contract_step_valid(data: WizardData) -> bool:
    return True


def is_punchcard_terms_valid(data: WizardData) -> bool:
    """Punchcards need at least one class and a price; other types pass."""
    if data.membership_type != MembershipType.PUNCHCARD:
        return True
    return (
        data.classes_included is not None
        and data.classes_included >= 1
        and data.punchcard_price is not None
        and data.punchcard_price >= 0
    )


def are_amounts_valid(data: WizardData) -> bool:
    """Optional fees and the hold limit must not be negative when set."""
    amounts = (data.sign_up_fee, data.cancellation_fee, data.hold_limit_per_year)
    return all(amount is None or amount >= 0 for amount in amounts)


def is_custom_start_date_valid(data: WizardData) -> bool:
    """A custom start date may be blank; otherwise it must be an ISO date."""
    if data.membership_start_date != StartDateOption.CUSTOM or not data.custom_start_date:
        return True
    try:
        date.fromisoformat(data.custom_start_date)
    except ValueError:
        return False
    return True


STEP_VALIDATORS: dict[WizardStep, Callable[[WizardData], bool]] = {
    WizardStep.BASICS: is_basics_step_valid,
    WizardStep.PROGRAM_ASSOCIATION: is_program_association_step_valid,
    WizardStep.PAYMENT_DETAILS: is_payment_step_valid,
    WizardStep.CONTRACT_TERMS: is_contract_step_valid,
}


def validate_step(step: WizardStep, data: WizardData) -> bool:
    """Run the gate for ``step``. Steps without a gate (success) pass."""
    try:
        validator = STEP_VALIDATORS.get(WizardStep(step))
    except ValueError:
        return True
    if validator is None:
        return True
    return validator(data)


def first_invalid_step(data: WizardData) -> Optional[WizardStep]:
    """The earliest step whose gate fails, or ``None`` if all pass."""
    for step in STEP_ORDER:
        if not validate_step(step, data):
            return step
    return None

"""Final step of the wizard: send the membership and report the outcome."""

from typing import Optional

from pydantic import BaseModel
from libs.common.errors import USER_MESSAGES, ErrorKind, user_message_for
from libs.common.logging import get_logger
from services.memberships_service.wizard.controller import MembershipWizard
from services.memberships_service.wizard.summary import MembershipSummary, build_summary
from services.memberships_service.wizard.validators import (
    are_amounts_valid,
    first_invalid_step,
    is_custom_start_date_valid,
    is_punchcard_terms_valid,
)

logger = get_logger(__name__)

CREATE_MEMBERSHIP_FAILED = "Failed to create membership. Please try again."
INCOMPLETE_STEP_MESSAGE = "Please complete the {step} step before submitting."
INVALID_PUNCHCARD_MESSAGE = (
    "Punchcard memberships need at least one class and a price of 0 or more."
)
INVALID_AMOUNTS_MESSAGE = "Fees and hold limits cannot be negative."
INVALID_START_DATE_MESSAGE = "Enter the custom start date as YYYY-MM-DD."

CREATE_MEMBERSHIP_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.ALREADY_MEMBER: USER_MESSAGES[ErrorKind.ALREADY_MEMBER],
    ErrorKind.ALREADY_INVITED: USER_MESSAGES[ErrorKind.ALREADY_INVITED],
    ErrorKind.NOT_FOUND: "The selected program or waiver is no longer available.",
    ErrorKind.PERMISSION_DENIED: "You do not have permission to create memberships.",
}


class MembershipCreated(BaseModel):
    id: str
    summary: MembershipSummary


async def submit_membership(wizard: MembershipWizard, client) -> Optional[MembershipCreated]:
    """
    Submit the wizard's data through ``client.create_membership``.

    Returns the created membership, or ``None`` with ``wizard.error`` set. On
    success the wizard is reset; on failure its data is kept so the user can
    retry.
    """
    data = wizard.snapshot()

    invalid = first_invalid_step(data)
    if invalid is not None:
        wizard.set_error(INCOMPLETE_STEP_MESSAGE.format(step=invalid.value.replace("-", " ")))
        return None
    if not is_punchcard_terms_valid(data):
        wizard.set_error(INVALID_PUNCHCARD_MESSAGE)
        return None
    if not are_amounts_valid(data):
        wizard.set_error(INVALID_AMOUNTS_MESSAGE)
        return None
    if not is_custom_start_date_valid(data):
        wizard.set_error(INVALID_START_DATE_MESSAGE)
        return None

    wizard.clear_error()
    wizard.set_loading(True)
    try:
        membership_id = await client.create_membership(data)
    except Exception as exc:
        logger.error("Creating membership %r failed: %s", data.membership_name, exc)
        message = user_message_for(
            exc, fallback=CREATE_MEMBERSHIP_FAILED, messages=CREATE_MEMBERSHIP_MESSAGES
        )
        wizard.set_error(message)
        return None
    finally:
        wizard.set_loading(False)

    logger.info("Created membership %s (%s)", membership_id, data.membership_name.strip())
    created = MembershipCreated(id=membership_id, summary=build_summary(data))
    wizard.reset()
    return created

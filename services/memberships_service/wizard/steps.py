"""Wizard steps and their one fixed order."""

import enum
from typing import Optional


class WizardStep(str, enum.Enum):
    BASICS = "basics"
    PROGRAM_ASSOCIATION = "program-association"
    PAYMENT_DETAILS = "payment-details"
    CONTRACT_TERMS = "contract-terms"
    SUCCESS = "success"


STEP_ORDER: tuple[WizardStep, ...] = (
    WizardStep.BASICS,
    WizardStep.PROGRAM_ASSOCIATION,
    WizardStep.PAYMENT_DETAILS,
    WizardStep.CONTRACT_TERMS,
    WizardStep.SUCCESS,
)

FIRST_STEP = STEP_ORDER[0]


def step_after(step) -> Optional[WizardStep]:
    """The next step, or ``None`` at the end or for a step not in the order."""
    try:
        index = STEP_ORDER.index(step)
    except ValueError:
        return None
    if index >= len(STEP_ORDER) - 1:
        return None
    return STEP_ORDER[index + 1]


def step_before(step) -> Optional[WizardStep]:
    """The previous step, or ``None`` at the start or for an unknown step."""
    try:
        index = STEP_ORDER.index(step)
    except ValueError:
        return None
    if index == 0:
        return None
    return STEP_ORDER[index - 1]

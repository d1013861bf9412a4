from services.memberships_service.wizard.controller import MembershipWizard
from services.memberships_service.wizard.data import DEFAULT_WIZARD_DATA, EntityRef, WizardData
from services.memberships_service.wizard.steps import STEP_ORDER, WizardStep
from services.memberships_service.wizard.submission import MembershipCreated, submit_membership

__all__ = [
    "DEFAULT_WIZARD_DATA",
    "EntityRef",
    "MembershipCreated",
    "MembershipWizard",
    "STEP_ORDER",
    "WizardData",
    "WizardStep",
    "submit_membership",
]

"""State controller for the add-membership wizard.

One ``MembershipWizard`` per open wizard, owned by whoever opened it. It is
never shared; each caller creates its own and calls ``reset()`` when the
wizard is closed or cancelled.
"""

from typing import Any, Mapping, Optional

from libs.common.logging import get_logger
from services.memberships_service.wizard.data import DEFAULT_WIZARD_DATA, WizardData
from services.memberships_service.wizard.steps import (
    FIRST_STEP,
    WizardStep,
    step_after,
    step_before,
)
from services.memberships_service.wizard.validators import validate_step

logger = get_logger(__name__)


class MembershipWizard:
    """
    Holds the current step, the accumulated data, the surfaced error and the
    loading flag, and is the only sanctioned way to change them.

    Steps move one at a time along ``STEP_ORDER``. ``next_step`` does not run
    the step gate; callers check ``can_proceed()`` to enable their Next action.
    """

    def __init__(self) -> None:
        self.step: WizardStep = FIRST_STEP
        self.data: WizardData = DEFAULT_WIZARD_DATA
        self.error: Optional[str] = None
        self.is_loading: bool = False

    def update_data(self, partial: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        """
        Shallow-merge field updates into the data and clear any error.

        Accepts a mapping, keyword arguments, or both. No business validation
        happens here.
        """
        updates = {**(partial or {}), **fields}
        self.data = self.data.merged(updates)
        self.error = None

    def next_step(self) -> None:
        following = step_after(self.step)
        if following is None:
            return
        logger.debug("Membership wizard advanced to %s", following.value)
        self.step = following
        self.error = None

    def previous_step(self) -> None:
        preceding = step_before(self.step)
        if preceding is None:
            return
        logger.debug("Membership wizard went back to %s", preceding.value)
        self.step = preceding
        self.error = None

    def jump_to(self, step: WizardStep) -> None:
        """
        Set the step directly.

        Escape hatch: this skips the one-step ordering and the step gates.
        Use ``next_step``/``previous_step`` for real navigation.
        """
        self.step = WizardStep(step)

    def set_error(self, message: str) -> None:
        self.error = message

    def clear_error(self) -> None:
        self.error = None

    def set_loading(self, is_loading: bool) -> None:
        self.is_loading = is_loading

    def reset(self) -> None:
        self.step = FIRST_STEP
        self.data = DEFAULT_WIZARD_DATA
        self.error = None
        self.is_loading = False

    def can_proceed(self) -> bool:
        """Whether the current step's Next/submit action should be enabled."""
        return validate_step(self.step, self.data)

    def snapshot(self) -> WizardData:
        """The data as it stands now; safe to hand off since it is frozen."""
        return self.data

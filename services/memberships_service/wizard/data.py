"""The record a membership-creation wizard accumulates across its steps."""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict
from services.memberships_service.models.enums import (
    AutoRenewal,
    ChargeSignUpFee,
    ContractLength,
    MembershipStatus,
    MembershipType,
    PaymentFrequency,
    StartDateOption,
)


class EntityRef(BaseModel):
    """A selected record: its id plus the name shown for it."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""


# ref field -> (flat id key, flat name key)
_REF_FIELDS: dict[str, tuple[str, str]] = {
    "associated_program": ("associated_program_id", "associated_program_name"),
    "associated_waiver": ("associated_waiver_id", "associated_waiver_name"),
}


class WizardData(BaseModel):
    """
    In-progress membership definition.

    Instances are frozen: ``merged`` returns a new record, so any instance
    handed to the submission boundary cannot change underneath it.
    """

    model_config = ConfigDict(frozen=True)

    # Basics
    membership_name: str = ""
    status: MembershipStatus = MembershipStatus.ACTIVE
    membership_type: MembershipType = MembershipType.STANDARD
    description: str = ""

    # Program association
    associated_program: Optional[EntityRef] = None
    associated_waiver: Optional[EntityRef] = None

    # Payment details. monthly_fee is the fee per billing period.
    sign_up_fee: Optional[float] = None
    charge_sign_up_fee: ChargeSignUpFee = ChargeSignUpFee.AT_REGISTRATION
    monthly_fee: Optional[float] = None
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    membership_start_date: StartDateOption = StartDateOption.SAME_AS_REGISTRATION
    custom_start_date: str = ""
    pro_rate_first_payment: bool = False

    # Contract terms
    contract_length: ContractLength = ContractLength.MONTH_TO_MONTH
    auto_renewal: AutoRenewal = AutoRenewal.NONE
    cancellation_fee: Optional[float] = None
    hold_limit_per_year: Optional[int] = None

    # Punchcard only
    classes_included: Optional[int] = None
    punchcard_price: Optional[float] = None

    @property
    def associated_program_id(self) -> Optional[str]:
        return self.associated_program.id if self.associated_program else None

    @property
    def associated_program_name(self) -> Optional[str]:
        return self.associated_program.name if self.associated_program else None

    @property
    def associated_waiver_id(self) -> Optional[str]:
        return self.associated_waiver.id if self.associated_waiver else None

    @property
    def associated_waiver_name(self) -> Optional[str]:
        return self.associated_waiver.name if self.associated_waiver else None

    def merged(self, updates: Mapping[str, Any]) -> "WizardData":
        """
        Shallow-merge ``updates`` into a copy of this record.

        Besides the model fields, the flat keys ``associated_program_id`` /
        ``associated_program_name`` (and the waiver pair) are accepted and
        folded into the matching ``EntityRef``. An empty or ``None`` id clears
        the reference. Unknown keys raise ``TypeError``.
        """
        updates = dict(updates)
        for ref_field, (id_key, name_key) in _REF_FIELDS.items():
            if id_key not in updates and name_key not in updates:
                continue
            if ref_field in updates:
                raise TypeError(
                    f"Pass either {ref_field} or {id_key}/{name_key}, not both"
                )
            updates[ref_field] = self._fold_ref(
                getattr(self, ref_field),
                updates.pop(id_key, ...),
                updates.pop(name_key, ...),
            )

        unknown = set(updates) - set(type(self).model_fields)
        if unknown:
            raise TypeError(f"Unknown wizard fields: {', '.join(sorted(unknown))}")

        return type(self).model_validate({**self.model_dump(), **updates})

    @staticmethod
    def _fold_ref(current: Optional[EntityRef], ref_id: Any, ref_name: Any) -> Optional[EntityRef]:
        # ``...`` marks a key the caller did not pass.
        if ref_id is ...:
            if current is None:
                # A name alone cannot make a reference.
                return None
            ref_id = current.id
        if not ref_id:
            return None
        if ref_name is ...:
            ref_name = current.name if current is not None and current.id == ref_id else ""
        return EntityRef(id=ref_id, name=ref_name or "")

    def to_payload(self) -> dict[str, Any]:
        """The JSON body the create-membership RPC expects."""
        custom = self.membership_start_date == StartDateOption.CUSTOM
        trial = self.membership_type == MembershipType.TRIAL
        return {
            "membership_name": self.membership_name.strip(),
            "status": self.status.value,
            "membership_type": self.membership_type.value,
            "description": self.description,
            "program_id": self.associated_program_id,
            "waiver_template_id": self.associated_waiver_id,
            "sign_up_fee": self.sign_up_fee,
            "charge_sign_up_fee": self.charge_sign_up_fee.value,
            "monthly_fee": None if trial else self.monthly_fee,
            "payment_frequency": self.payment_frequency.value,
            "membership_start_date": self.membership_start_date.value,
            "custom_start_date": (self.custom_start_date or None) if custom else None,
            "pro_rate_first_payment": self.pro_rate_first_payment,
            "contract_length": self.contract_length.value,
            "auto_renewal": self.auto_renewal.value,
            "cancellation_fee": self.cancellation_fee,
            "hold_limit_per_year": self.hold_limit_per_year,
            "classes_included": self.classes_included,
            "punchcard_price": self.punchcard_price,
        }


DEFAULT_WIZARD_DATA = WizardData()

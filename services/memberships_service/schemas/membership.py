from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from services.memberships_service.models.enums import (
    AutoRenewal,
    ChargeSignUpFee,
    ContractLength,
    MembershipStatus,
    MembershipType,
    PaymentFrequency,
    StartDateOption,
)


class MembershipPlanCreate(BaseModel):
    """Body sent by the membership-creation wizard."""

    membership_name: str = Field(..., min_length=1, max_length=200)
    status: MembershipStatus = MembershipStatus.ACTIVE
    membership_type: MembershipType = MembershipType.STANDARD
    description: str = ""
    program_id: str = Field(..., min_length=1)
    waiver_template_id: str = Field(..., min_length=1)

    sign_up_fee: Optional[float] = Field(None, ge=0)
    charge_sign_up_fee: ChargeSignUpFee = ChargeSignUpFee.AT_REGISTRATION
    monthly_fee: Optional[float] = None
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    membership_start_date: StartDateOption = StartDateOption.SAME_AS_REGISTRATION
    custom_start_date: Optional[date] = None
    pro_rate_first_payment: bool = False

    contract_length: ContractLength = ContractLength.MONTH_TO_MONTH
    auto_renewal: AutoRenewal = AutoRenewal.NONE
    cancellation_fee: Optional[float] = Field(None, ge=0)
    hold_limit_per_year: Optional[int] = Field(None, ge=0)

    classes_included: Optional[int] = None
    punchcard_price: Optional[float] = None

    @field_validator("membership_name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("membership_name must not be blank")
        return v

    @model_validator(mode="after")
    def check_terms(self) -> "MembershipPlanCreate":
        if self.membership_type == MembershipType.PUNCHCARD:
            if self.classes_included is None or self.classes_included < 1:
                raise ValueError("punchcard memberships need classes_included >= 1")
            if self.punchcard_price is None or self.punchcard_price < 0:
                raise ValueError("punchcard memberships need punchcard_price >= 0")
            if self.monthly_fee is not None and self.monthly_fee < 0:
                raise ValueError("monthly_fee must not be negative")
        elif self.membership_type == MembershipType.TRIAL:
            # Trials are free whatever fee was entered.
            self.monthly_fee = None
        elif self.monthly_fee is None or self.monthly_fee < 0:
            raise ValueError("monthly_fee >= 0 is required unless the membership is a trial")
        if self.membership_start_date != StartDateOption.CUSTOM:
            self.custom_start_date = None
        return self


class AddMembershipRequest(BaseModel):
    member_id: str = Field(..., min_length=1)
    membership_plan_id: str = Field(..., min_length=1)


class ChangeMembershipRequest(BaseModel):
    member_id: str = Field(..., min_length=1)
    new_membership_plan_id: str = Field(..., min_length=1)


class IdResponse(BaseModel):
    id: str

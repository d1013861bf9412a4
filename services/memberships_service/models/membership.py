"""Membership plans and the history of which member held which plan."""

from datetime import date, datetime
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.memberships_service.models.core import new_id
from services.memberships_service.models.enums import (
    AutoRenewal,
    BillingType,
    ChargeSignUpFee,
    ContractLength,
    MemberMembershipStatus,
    MembershipType,
    PaymentFrequency,
    StartDateOption,
    enum_values,
)
from sqlalchemy import Boolean, Date, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship


def _enum_column(enum_cls, name: str, default):
    return mapped_column(
        SAEnum(
            enum_cls,
            name=name,
            values_callable=enum_values,
            validate_strings=True,
        ),
        default=default,
        nullable=False,
    )


class MembershipPlan(Base):
    """A membership offering members can be put on."""

    __tablename__ = "membership_plans"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    organization_id: Mapped[str] = mapped_column(String, index=True, nullable=False)
    program_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("programs.id"), index=True, nullable=True
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_trial: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Display labels, e.g. "Monthly", "12 Months", "Unlimited"
    price: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    signup_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    frequency: Mapped[str] = mapped_column(String, default="Monthly", nullable=False)
    contract_length: Mapped[str] = mapped_column(String, nullable=False)
    access_level: Mapped[str] = mapped_column(String, nullable=False)

    # Terms as entered in the creation wizard
    membership_type: Mapped[MembershipType] = _enum_column(
        MembershipType, "membership_type_enum", MembershipType.STANDARD
    )
    charge_signup_fee: Mapped[ChargeSignUpFee] = _enum_column(
        ChargeSignUpFee, "charge_signup_fee_enum", ChargeSignUpFee.AT_REGISTRATION
    )
    payment_frequency: Mapped[PaymentFrequency] = _enum_column(
        PaymentFrequency, "payment_frequency_enum", PaymentFrequency.MONTHLY
    )
    start_date_option: Mapped[StartDateOption] = _enum_column(
        StartDateOption, "start_date_option_enum", StartDateOption.SAME_AS_REGISTRATION
    )
    custom_start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    pro_rate_first_payment: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    contract_term: Mapped[ContractLength] = _enum_column(
        ContractLength, "contract_length_enum", ContractLength.MONTH_TO_MONTH
    )
    auto_renewal: Mapped[AutoRenewal] = _enum_column(
        AutoRenewal, "auto_renewal_enum", AutoRenewal.NONE
    )
    cancellation_fee: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    hold_limit_per_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    classes_included: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    program: Mapped[Optional["Program"]] = relationship(  # noqa: F821
        back_populates="plans"
    )
    waivers: Mapped[list["MembershipWaiver"]] = relationship(  # noqa: F821
        back_populates="membership_plan", cascade="all, delete-orphan"
    )


class MemberMembership(Base):
    """Links a member to a plan, keeping history across changes."""

    __tablename__ = "member_memberships"
    __table_args__ = (
        Index("member_membership_member_status_idx", "member_id", "status"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    member_id: Mapped[str] = mapped_column(
        ForeignKey("members.id"), index=True, nullable=False
    )
    membership_plan_id: Mapped[str] = mapped_column(
        ForeignKey("membership_plans.id"), nullable=False
    )
    status: Mapped[MemberMembershipStatus] = _enum_column(
        MemberMembershipStatus,
        "member_membership_status_enum",
        MemberMembershipStatus.ACTIVE,
    )
    billing_type: Mapped[BillingType] = _enum_column(
        BillingType, "billing_type_enum", BillingType.AUTOPAY
    )
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    end_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    next_payment_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    member: Mapped["Member"] = relationship(back_populates="memberships")  # noqa: F821
    membership_plan: Mapped["MembershipPlan"] = relationship()

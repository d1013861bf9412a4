"""Waiver templates and their association with membership plans."""

from datetime import datetime
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.memberships_service.models.core import new_id
from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship


class WaiverTemplate(Base):
    """
    Liability waiver text. Editing a template archives the previous text as a
    row whose ``parent_id`` points at the current (root) template.
    """

    __tablename__ = "waiver_templates"
    __table_args__ = (
        Index(
            "waiver_template_org_slug_version_idx",
            "organization_id",
            "slug",
            "version",
            unique=True,
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    organization_id: Mapped[str] = mapped_column(String, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[str] = mapped_column(String, nullable=False)
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    requires_guardian: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    guardian_age_threshold: Mapped[int] = mapped_column(Integer, default=16, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    parent_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class MembershipWaiver(Base):
    """Waivers a member must sign to hold a plan."""

    __tablename__ = "membership_waivers"

    membership_plan_id: Mapped[str] = mapped_column(
        ForeignKey("membership_plans.id"), primary_key=True
    )
    waiver_template_id: Mapped[str] = mapped_column(
        ForeignKey("waiver_templates.id"), primary_key=True
    )
    is_required: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    membership_plan: Mapped["MembershipPlan"] = relationship(  # noqa: F821
        back_populates="waivers"
    )
    waiver_template: Mapped[WaiverTemplate] = relationship()

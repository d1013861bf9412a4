"""Reference data the wizard offers as choices, and what to show when it
cannot be fetched.

The RPC client reports failures as a ``FetchResult`` carrying the error; the
``ReferenceDataLoader`` here is the one place that decides to fall back.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel
from libs.common.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Either a fetched value or the error that prevented it."""

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ProgramOption(BaseModel):
    id: str
    name: str
    status: str = "active"


class WaiverTemplateOption(BaseModel):
    id: str
    name: str
    version: int = 1
    description: Optional[str] = None
    is_default: bool = False

    @property
    def label(self) -> str:
        return f"{self.name} (v{self.version})"


class PlanOption(BaseModel):
    id: str
    name: str
    slug: str = ""
    category: Optional[str] = None
    program: Optional[str] = None
    price: float = 0
    signup_fee: float = 0
    frequency: str = "Monthly"
    contract_length: Optional[str] = None
    access_level: Optional[str] = None
    description: Optional[str] = None
    is_trial: bool = False
    is_active: bool = True


FALLBACK_PROGRAMS: tuple[ProgramOption, ...] = (
    ProgramOption(id="1", name="Adult Brazilian Jiu-jitsu", status="active"),
    ProgramOption(id="2", name="Kids Program", status="active"),
    ProgramOption(id="3", name="Competition Team", status="active"),
    ProgramOption(id="4", name="Judo Fundamentals", status="active"),
    ProgramOption(id="5", name="Wrestling Fundamentals", status="inactive"),
)

FALLBACK_PLANS: tuple[PlanOption, ...] = (
    PlanOption(
        id="mock-plan-1",
        name="12 Month Commitment (Gold)",
        slug="12_month_commitment_gold",
        category="Adult Brazilian Jiu-Jitsu",
        program="Adult",
        price=150,
        signup_fee=35,
        frequency="Monthly",
        contract_length="12 Months",
        access_level="Unlimited",
        description="12 month contract with unlimited access",
    ),
    PlanOption(
        id="mock-plan-2",
        name="Month to Month (Gold)",
        slug="month_to_month_gold",
        category="Adult Brazilian Jiu-Jitsu",
        program="Adult",
        price=170,
        signup_fee=35,
        frequency="Monthly",
        contract_length="Month-to-Month",
        access_level="Unlimited",
        description="No commitment, month-to-month with unlimited access",
    ),
    PlanOption(
        id="mock-plan-3",
        name="7-Day Free Trial",
        slug="7_day_free_trial",
        category="Adult Brazilian Jiu-Jitsu",
        program="Adult",
        price=0,
        signup_fee=0,
        frequency="None",
        contract_length="7 Days",
        access_level="3 Classes Total",
        description="7-day trial with 3 classes",
        is_trial=True,
    ),
    PlanOption(
        id="mock-plan-4",
        name="Kids Monthly",
        slug="kids_monthly",
        category="Kids Program",
        program="Kids",
        price=95,
        signup_fee=25,
        frequency="Monthly",
        contract_length="Month-to-Month",
        access_level="8 Classes/mo",
        description="Monthly membership for kids program",
    ),
    PlanOption(
        id="mock-plan-5",
        name="Kids Free Trial Week",
        slug="kids_free_trial_week",
        category="Kids Program",
        program="Kids",
        price=0,
        signup_fee=0,
        frequency="None",
        contract_length="7 Days",
        access_level="2 Classes Total",
        description="7-day trial with 2 classes for kids",
        is_trial=True,
    ),
    PlanOption(
        id="mock-plan-6",
        name="Competition Team",
        slug="competition_team",
        category="Competition Team",
        program="Competition",
        price=200,
        signup_fee=50,
        frequency="Monthly",
        contract_length="6 Months",
        access_level="Unlimited",
        description="6 month commitment for competition team members",
    ),
)


class ReferenceDataLoader:
    """
    Loads the wizard's choices through an RPC client and applies the
    fallback policy:

    * programs: on failure, the built-in list restricted to active programs
    * waiver templates: on failure, no templates
    * membership plans: on failure or when none are active, the built-in plans
    """

    def __init__(self, client):
        self.client = client

    async def load_programs(self) -> list[ProgramOption]:
        result = await self.client.list_active_programs()
        if not result.ok:
            logger.warning("Falling back to built-in programs: %s", result.error)
            return [p for p in FALLBACK_PROGRAMS if p.status == "active"]
        return list(result.value or [])

    async def load_waiver_templates(self) -> list[WaiverTemplateOption]:
        result = await self.client.list_active_waiver_templates()
        if not result.ok:
            logger.warning("Waiver templates unavailable: %s", result.error)
            return []
        return list(result.value or [])

    async def load_waiver_options(self) -> list[tuple[str, str]]:
        """(id, label) pairs for the waiver picker."""
        return [(t.id, t.label) for t in await self.load_waiver_templates()]

    async def load_membership_plans(self) -> list[PlanOption]:
        result = await self.client.list_membership_plans()
        if not result.ok:
            logger.warning("Falling back to built-in membership plans: %s", result.error)
            return list(FALLBACK_PLANS)
        active = [plan for plan in result.value or [] if plan.is_active]
        if not active:
            logger.info("No active membership plans returned, using built-in plans")
            return list(FALLBACK_PLANS)
        return active

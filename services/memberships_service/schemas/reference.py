from typing import List, Optional

from pydantic import BaseModel, ConfigDict


# --- Programs ---


class ProgramResponse(BaseModel):
    id: str
    name: str
    status: str


class ProgramListResponse(BaseModel):
    programs: List[ProgramResponse]


# --- Waiver templates ---


class WaiverTemplateResponse(BaseModel):
    id: str
    name: str
    version: int
    description: Optional[str] = None
    is_default: bool = False
    requires_guardian: bool = True
    guardian_age_threshold: int = 16

    model_config = ConfigDict(from_attributes=True)


class WaiverTemplateListResponse(BaseModel):
    templates: List[WaiverTemplateResponse]


# --- Membership plans ---


class MembershipPlanResponse(BaseModel):
    id: str
    name: str
    slug: str
    category: Optional[str] = None
    program: Optional[str] = None
    price: float
    signup_fee: float
    frequency: str
    contract_length: Optional[str] = None
    access_level: Optional[str] = None
    description: Optional[str] = None
    is_trial: bool
    is_active: bool


class MembershipPlanListResponse(BaseModel):
    plans: List[MembershipPlanResponse]

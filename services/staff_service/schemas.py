from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class StaffRole(BaseModel):
    id: str
    key: str
    name: str
    description: Optional[str] = ""


class FetchRolesResult(BaseModel):
    success: bool
    roles: Optional[List[StaffRole]] = None
    error: Optional[str] = None


class InviteStaffRequest(BaseModel):
    email_address: EmailStr
    role_key: str = Field(..., min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


class InviteStaffResult(BaseModel):
    success: bool
    error: Optional[str] = None
    invitation_id: Optional[str] = None


class UpdateStaffRequest(BaseModel):
    role_key: str = Field(..., min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


class UpdateStaffResult(BaseModel):
    success: bool
    error: Optional[str] = None

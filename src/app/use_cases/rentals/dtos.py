"""Data Transfer Objects for Rental Use Cases

Pydantic models for units, tenants and leases. Amounts are integer cents.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from src.domain.unit import UnitStatus
from src.domain.lease import LeaseStatus, BILLING_ANCHOR_DAY


class CreateUnitCommandDTO(BaseModel):
    """Command DTO for creating a unit"""

    number: str = Field(..., min_length=1, description="Unit number (unique)")
    size: str = Field(..., min_length=1, description="Size label (e.g., '10x10')")
    rate_cents: int = Field(..., ge=0, description="Monthly rate in cents")
    type: str = Field(default="standard", description="Unit type")
    status: UnitStatus = Field(default=UnitStatus.VACANT, description="Initial status")
    property_id: Optional[str] = Field(default=None, description="Property reference")
    notes: Optional[str] = Field(default=None, description="Free-text notes")

    class Config:
        json_schema_extra = {
            "example": {
                "number": "A-101",
                "size": "10x10",
                "rate_cents": 12500,
                "type": "climate",
            }
        }


class UpdateUnitCommandDTO(BaseModel):
    """Partial update; only fields present in the request are applied"""

    number: Optional[str] = Field(default=None, min_length=1)
    size: Optional[str] = Field(default=None, min_length=1)
    rate_cents: Optional[int] = Field(default=None, ge=0)
    type: Optional[str] = None
    status: Optional[UnitStatus] = None
    property_id: Optional[str] = None
    notes: Optional[str] = None


class UnitResponseDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    number: str
    size: str
    rate_cents: int
    type: str
    status: UnitStatus
    property_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CreateTenantCommandDTO(BaseModel):
    """Command DTO for creating a tenant"""

    name: str = Field(..., min_length=1, description="Tenant name")
    email: Optional[str] = Field(default=None, description="Contact email")
    phone: Optional[str] = Field(default=None, description="Contact phone")


class TenantResponseDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime


class CreateLeaseCommandDTO(BaseModel):
    """
    Command DTO for starting a lease

    Used as input to CreateLease use case.
    """

    unit_id: int = Field(..., description="Unit being rented")
    tenant_id: int = Field(..., description="Renting tenant")
    start_date: date = Field(..., description="First day of the rental")
    rent_cents: int = Field(..., ge=0, description="Monthly rent in cents")
    deposit_cents: int = Field(default=0, ge=0, description="Security deposit in cents")
    autopay: bool = Field(default=False, description="Charge the saved card on each due date")
    square_card_id: Optional[str] = Field(default=None, description="Saved Square card id")

    class Config:
        json_schema_extra = {
            "example": {
                "unit_id": 1,
                "tenant_id": 7,
                "start_date": "2025-03-15",
                "rent_cents": 10000,
                "deposit_cents": 5000,
                "autopay": True,
                "square_card_id": "ccof:abc123",
            }
        }


class LeaseResponseDTO(BaseModel):
    """
    Response DTO for lease operations

    The saved card itself is never returned, only whether one is on file.
    """

    id: int
    unit_id: int
    tenant_id: int
    start_date: date
    rent_cents: int
    deposit_cents: int
    status: LeaseStatus
    autopay: bool
    has_saved_card: bool
    billing_anchor_day: int
    next_due_date: Optional[date] = None
    first_charge_cents: Optional[int] = Field(
        default=None, description="Prorated first-month charge (creation only)"
    )
    created_at: datetime


class LeasePreviewDTO(BaseModel):
    """Prorated first charge and next due date for a prospective lease"""

    amount_cents: int = Field(..., description="Prorated first-month charge")
    next_due_date: date = Field(..., description="First recurring due date")
    monthly_cents: int = Field(..., description="Unit monthly rate")
    billing_anchor_day: int = Field(default=BILLING_ANCHOR_DAY)

    class Config:
        json_schema_extra = {
            "example": {
                "amount_cents": 5484,
                "next_due_date": "2025-04-01",
                "monthly_cents": 10000,
                "billing_anchor_day": 1,
            }
        }


class SaveCardCommandDTO(BaseModel):
    lease_id: int
    source_id: str = Field(..., min_length=1, description="Card nonce from the web payment form")


class SavedCardResponseDTO(BaseModel):
    lease_id: int
    autopay: bool
    card_brand: Optional[str] = None
    card_last_4: Optional[str] = None


def to_lease_response(lease, first_charge_cents: Optional[int] = None) -> LeaseResponseDTO:
    """Convert a Lease entity to LeaseResponseDTO"""
    return LeaseResponseDTO(
        id=lease.id,
        unit_id=lease.unit_id,
        tenant_id=lease.tenant_id,
        start_date=lease.start_date,
        rent_cents=lease.rent_cents,
        deposit_cents=lease.deposit_cents,
        status=lease.status,
        autopay=lease.autopay,
        has_saved_card=lease.square_card_id is not None,
        billing_anchor_day=lease.billing_anchor_day,
        next_due_date=lease.next_due_date,
        first_charge_cents=first_charge_cents,
        created_at=lease.created_at,
    )

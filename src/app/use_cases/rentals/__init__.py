"""Rental domain use cases"""
from .units import ListUnits, CreateUnit, UpdateUnit
from .tenants import CreateTenant, GetTenant
from .leases import PreviewLease, CreateLease, SaveLeaseCard, EndLease
from .dtos import (
    CreateUnitCommandDTO,
    UpdateUnitCommandDTO,
    UnitResponseDTO,
    CreateTenantCommandDTO,
    TenantResponseDTO,
    CreateLeaseCommandDTO,
    LeaseResponseDTO,
    LeasePreviewDTO,
    SaveCardCommandDTO,
    SavedCardResponseDTO,
)

__all__ = [
    "ListUnits",
    "CreateUnit",
    "UpdateUnit",
    "CreateTenant",
    "GetTenant",
    "PreviewLease",
    "CreateLease",
    "SaveLeaseCard",
    "EndLease",
    "CreateUnitCommandDTO",
    "UpdateUnitCommandDTO",
    "UnitResponseDTO",
    "CreateTenantCommandDTO",
    "TenantResponseDTO",
    "CreateLeaseCommandDTO",
    "LeaseResponseDTO",
    "LeasePreviewDTO",
    "SaveCardCommandDTO",
    "SavedCardResponseDTO",
]

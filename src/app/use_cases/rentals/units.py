"""Unit Use Cases

List, create and update rentable units.
"""

from typing import List
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.unit_repository import UnitRepository
from src.domain.unit import Unit
from .dtos import CreateUnitCommandDTO, UpdateUnitCommandDTO, UnitResponseDTO


class ListUnits:

    def __init__(self, unit_repo: UnitRepository):
        self.unit_repo = unit_repo

    async def execute(self) -> Result[List[UnitResponseDTO]]:
        units = await self.unit_repo.list_all()
        return Return.ok([UnitResponseDTO.model_validate(unit) for unit in units])


class CreateUnit:

    def __init__(self, uow: UnitOfWork, unit_repo: UnitRepository):
        self.uow = uow
        self.unit_repo = unit_repo

    async def execute(self, command: CreateUnitCommandDTO) -> Result[UnitResponseDTO]:
        try:
            unit = await self.unit_repo.create(Unit(**command.model_dump()))
            await self.uow.commit()
            return Return.ok(UnitResponseDTO.model_validate(unit))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_UNIT_FAILED",
                    message="Failed to create unit",
                    reason=str(e),
                )
            )


class UpdateUnit:
    """
    Use Case: Partially update a unit

    Only fields explicitly set on the command are written.
    """

    def __init__(self, uow: UnitOfWork, unit_repo: UnitRepository):
        self.uow = uow
        self.unit_repo = unit_repo

    async def execute(self, unit_id: int, command: UpdateUnitCommandDTO) -> Result[UnitResponseDTO]:
        changes = command.model_dump(exclude_unset=True)
        try:
            unit = await self.unit_repo.update(unit_id, changes)
            if not unit:
                return Return.err(
                    Error(code="UNIT_NOT_FOUND", message=f"Unit {unit_id} not found")
                )
            await self.uow.commit()
            return Return.ok(UnitResponseDTO.model_validate(unit))
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_UNIT_FAILED",
                    message="Failed to update unit",
                    reason=str(e),
                )
            )

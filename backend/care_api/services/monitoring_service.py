from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from care_api.exceptions import NotFoundError, ValidationError
from care_api.models.chronic import CONDITION_FLAGS, ChronicMonitoring
from care_api.models.patient import Patient
from care_api.models.pregnancy import PregnancyMonitoring
from care_api.schemas.chronic import ChronicCreate
from care_api.schemas.pregnancy import PregnancyCreate
from care_api.services.transactions import Step, TransactionCoordinator


class MonitoringService:
    """Creates monitoring records together with the owning patient's flag.

    The record insert and the flag update always run through the coordinator,
    so either both are visible or neither is.
    """

    def __init__(self, coordinator: TransactionCoordinator):
        self.coordinator = coordinator

    def _require_patient_step(self, patient_id: int) -> Step:
        async def require_patient(session: AsyncSession):
            found = await session.scalar(select(Patient.id).where(Patient.id == patient_id))
            if found is None:
                raise NotFoundError(f"Patient {patient_id} not found")
            return found
        return require_patient

    def _insert_step(self, record) -> Step:
        async def insert(session: AsyncSession):
            session.add(record)
            await session.flush()
            await session.refresh(record)
            return record
        return insert

    def _flag_step(self, patient_id: int, flag: str) -> Step:
        async def set_flag(session: AsyncSession):
            result = await session.execute(
                update(Patient)
                .where(Patient.id == patient_id)
                .values({flag: True, "updated_at": func.now()})
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Patient {patient_id} not found")
        return set_flag

    async def create_pregnancy(self, data: PregnancyCreate) -> PregnancyMonitoring:
        record = PregnancyMonitoring(**data.model_dump())
        _, created, _ = await self.coordinator.run(
            [
                self._require_patient_step(data.patient_id),
                self._insert_step(record),
                self._flag_step(data.patient_id, "is_pregnant"),
            ],
            label="create_pregnancy_monitoring",
        )
        return created

    async def create_chronic(self, data: ChronicCreate) -> ChronicMonitoring:
        flag = CONDITION_FLAGS.get(data.condition_type)
        if flag is None:
            raise ValidationError(
                "Unknown condition type",
                details={"condition_type": f"Must be one of: {', '.join(CONDITION_FLAGS)}"},
            )
        record = ChronicMonitoring(**data.model_dump())
        _, created, _ = await self.coordinator.run(
            [
                self._require_patient_step(data.patient_id),
                self._insert_step(record),
                self._flag_step(data.patient_id, flag),
            ],
            label="create_chronic_monitoring",
        )
        return created

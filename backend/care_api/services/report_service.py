from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from care_api.models.chronic import BloodPressureRecord, ChronicMonitoring, GlucoseRecord
from care_api.models.exam import PENDING_EXAM_STATUSES, Exam
from care_api.models.patient import Patient
from care_api.models.pregnancy import HIGH_RISK, PregnancyMonitoring
from care_api.schemas.report import (
    AlertsReport,
    BloodPressureAlert,
    GlucoseAlert,
    HighRiskPregnancyAlert,
    SummaryReport,
)

ALERT_LIMIT = 10
SYSTOLIC_LIMIT = 140
DIASTOLIC_LIMIT = 90
GLUCOSE_LIMIT = 180


class ReportService:
    async def summary(self, db: AsyncSession) -> SummaryReport:
        total = await db.scalar(select(func.count(Patient.id))) or 0
        pregnant = await db.scalar(select(func.count(Patient.id)).where(Patient.is_pregnant.is_(True))) or 0
        hypertensive = await db.scalar(
            select(func.count(Patient.id)).where(Patient.is_hypertensive.is_(True))
        ) or 0
        diabetic = await db.scalar(select(func.count(Patient.id)).where(Patient.is_diabetic.is_(True))) or 0
        pending = await db.scalar(
            select(func.count(Exam.id)).where(Exam.status.in_(PENDING_EXAM_STATUSES))
        ) or 0
        return SummaryReport(
            total_patients=total,
            pregnant_patients=pregnant,
            hypertensive_patients=hypertensive,
            diabetic_patients=diabetic,
            pending_exams=pending,
        )

    async def alerts(self, db: AsyncSession) -> AlertsReport:
        return AlertsReport(
            high_risk_pregnancies=await self._high_risk_pregnancies(db),
            high_blood_pressure=await self._high_blood_pressure(db),
            high_glucose=await self._high_glucose(db),
        )

    async def _high_risk_pregnancies(self, db: AsyncSession) -> list[HighRiskPregnancyAlert]:
        result = await db.execute(
            select(PregnancyMonitoring.id, PregnancyMonitoring.patient_id, Patient.full_name)
            .join(Patient, PregnancyMonitoring.patient_id == Patient.id)
            .where(PregnancyMonitoring.risk_classification == HIGH_RISK)
            .order_by(PregnancyMonitoring.id)
            .limit(ALERT_LIMIT)
        )
        return [
            HighRiskPregnancyAlert(id=row.id, patient_id=row.patient_id, patient_name=row.full_name)
            for row in result
        ]

    async def _latest_per_patient(self, db: AsyncSession, record, condition) -> list:
        """Most recent out-of-range measurement of ``record`` for each patient."""
        ranked = (
            select(
                record,
                ChronicMonitoring.patient_id.label("patient_id"),
                Patient.full_name.label("patient_name"),
                func.row_number()
                .over(
                    partition_by=ChronicMonitoring.patient_id,
                    order_by=(record.measurement_date.desc(), record.id.desc()),
                )
                .label("rn"),
            )
            .join(ChronicMonitoring, record.chronic_monitoring_id == ChronicMonitoring.id)
            .join(Patient, ChronicMonitoring.patient_id == Patient.id)
            .where(condition)
            .subquery()
        )
        result = await db.execute(
            select(ranked).where(ranked.c.rn == 1).order_by(ranked.c.measurement_date.desc()).limit(ALERT_LIMIT)
        )
        return result.mappings().all()

    async def _high_blood_pressure(self, db: AsyncSession) -> list[BloodPressureAlert]:
        rows = await self._latest_per_patient(
            db,
            BloodPressureRecord,
            or_(BloodPressureRecord.systolic > SYSTOLIC_LIMIT, BloodPressureRecord.diastolic > DIASTOLIC_LIMIT),
        )
        return [BloodPressureAlert(**row) for row in rows]

    async def _high_glucose(self, db: AsyncSession) -> list[GlucoseAlert]:
        rows = await self._latest_per_patient(db, GlucoseRecord, GlucoseRecord.glucose_level > GLUCOSE_LIMIT)
        return [GlucoseAlert(**row) for row in rows]

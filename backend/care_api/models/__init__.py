from care_api.models.user import User
from care_api.models.patient import Patient
from care_api.models.exam import Exam
from care_api.models.pregnancy import PregnancyMonitoring, PregnancyExam
from care_api.models.chronic import ChronicMonitoring, BloodPressureRecord, GlucoseRecord
from care_api.models.appointment import Appointment

__all__ = ["User", "Patient", "Exam", "PregnancyMonitoring", "PregnancyExam",
           "ChronicMonitoring", "BloodPressureRecord", "GlucoseRecord", "Appointment"]

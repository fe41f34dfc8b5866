import logging
from typing import Optional

from django.db import transaction

from doctor.exceptions import ResourceNotFound
from doctor.models import Doctor
from doctor.repositories import DoctorRepository

logger = logging.getLogger(__name__)

_doctors = DoctorRepository()


def list_doctors(*, repository: Optional[DoctorRepository] = None) -> list[Doctor]:
    return (repository or _doctors).find_all()


def get_doctor(doctor_id: int, *, repository: Optional[DoctorRepository] = None) -> Doctor:
    doctor = (repository or _doctors).find_by_id(doctor_id)
    if doctor is None:
        raise ResourceNotFound(f'Doctor not found with id: {doctor_id}')
    return doctor


@transaction.atomic
def create_doctor(*, name: str, specialization: str, repository: Optional[DoctorRepository] = None) -> Doctor:
    doctor = (repository or _doctors).save(Doctor(name=name, specialization=specialization))
    logger.info('doctor %s created', doctor.id)
    return doctor


@transaction.atomic
def update_doctor(doctor_id: int, *, name: Optional[str] = None, specialization: Optional[str] = None,
                  repository: Optional[DoctorRepository] = None) -> Doctor:
    repo = repository or _doctors
    doctor = get_doctor(doctor_id, repository=repo)
    if name is not None:
        doctor.name = name
    if specialization is not None:
        doctor.specialization = specialization
    return repo.save(doctor)


@transaction.atomic
def delete_doctor(doctor_id: int, *, repository: Optional[DoctorRepository] = None) -> None:
    """Delete a doctor together with every report they administer."""
    repo = repository or _doctors
    if not repo.exists_by_id(doctor_id):
        raise ResourceNotFound(f'Doctor not found with id: {doctor_id}')
    repo.delete_by_id(doctor_id)
    logger.info('doctor %s deleted with their reports', doctor_id)


def format_doctor(doctor: Doctor) -> dict:
    return {
        'id': doctor.id,
        'name': doctor.name,
        'specialization': doctor.specialization,
        'createdAt': doctor.created_at.isoformat() if doctor.created_at else None,
        'updatedAt': doctor.updated_at.isoformat() if doctor.updated_at else None,
    }

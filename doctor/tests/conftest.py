import pytest

from doctor.models import Doctor, Donor, DonorMedicalReport
from doctor.services.reports import DoctorService


@pytest.fixture
def service():
    return DoctorService()


@pytest.fixture
def doctor(db):
    return Doctor.objects.create(name='Dr. John Smith', specialization='Senior Doctor')


@pytest.fixture
def other_doctor(db):
    return Doctor.objects.create(name='Dr. Sarah Johnson', specialization='Senior Doctor')


@pytest.fixture
def donor(db):
    return Donor.objects.create(name='Nimal Perera', blood_type='O+', phone='0771234567')


@pytest.fixture
def report(donor, doctor):
    return DonorMedicalReport.objects.create(donor=donor, doctor=doctor, health_status='Pending')

"""
Integration tests for the doctor API.

These tests exercise every ``/api/doctor`` endpoint through Django REST
Framework's APIClient: report state transitions, donor and doctor
lookups, statistics and the shape of error responses.

To run the tests:

```
pytest -q doctor/tests
```
"""
from datetime import timedelta
from unittest import mock

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from doctor.models import Doctor, Donor, DonorMedicalReport
from doctor.views import reports as report_views

API = '/api/doctor'


class DoctorReportAPITests(APITestCase):
    def setUp(self) -> None:
        """Two doctors, two donors and three reports owned by the first doctor."""
        self.doctor = Doctor.objects.create(name='Ms. Shanika Jayawardena', specialization='Senior Doctor')
        self.other_doctor = Doctor.objects.create(name='Dr. John Smith', specialization='Senior Doctor')
        self.donor = Donor.objects.create(name='Nimal Perera', blood_type='O+')
        self.other_donor = Donor.objects.create(name='Kamala Silva', blood_type='A-')

        self.pending = DonorMedicalReport.objects.create(
            donor=self.donor, doctor=self.doctor, health_status='Pending',
        )
        self.approved = DonorMedicalReport.objects.create(
            donor=self.other_donor, doctor=self.doctor, health_status='Fit to Donate', is_approved=True,
        )
        self.approved_too = DonorMedicalReport.objects.create(
            donor=self.other_donor, doctor=self.doctor, health_status='Fit to Donate', is_approved=True,
        )

    # --- state transitions -------------------------------------------------

    def test_approve_report(self):
        response = self.client.put(f'{API}/reports/{self.pending.id}/approve')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['isApproved'])
        self.assertEqual(response.data['healthStatus'], 'Fit to Donate')
        self.pending.refresh_from_db()
        self.assertTrue(self.pending.is_approved)

    def test_reject_report(self):
        response = self.client.put(f'{API}/reports/{self.approved.id}/reject')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['isApproved'])
        self.assertEqual(response.data['healthStatus'], 'Unfit')

    def test_approve_missing_report_returns_structured_404(self):
        response = self.client.put(f'{API}/reports/99999/approve')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data['ok'])
        self.assertEqual(response.data['status'], 404)
        self.assertEqual(response.data['error'], 'not_found')
        self.assertIn('99999', response.data['message'])
        self.assertEqual(response.data['path'], f'{API}/reports/99999/approve')
        self.assertIn('timestamp', response.data)

    def test_add_notes_appends(self):
        first = self.client.put(f'{API}/reports/{self.pending.id}/add-notes', {'notes': 'A'}, format='json')
        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual(first.data['doctorNotes'], 'A')
        second = self.client.put(f'{API}/reports/{self.pending.id}/add-notes', {'notes': 'B'}, format='json')
        self.assertEqual(second.data['doctorNotes'], 'A\n\nB')

    def test_add_notes_rejects_blank_and_too_long(self):
        blank = self.client.put(f'{API}/reports/{self.pending.id}/add-notes', {'notes': '   '}, format='json')
        self.assertEqual(blank.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(blank.data['error'], 'validation_error')
        self.assertIn('notes', blank.data['details'])

        missing = self.client.put(f'{API}/reports/{self.pending.id}/add-notes', {}, format='json')
        self.assertEqual(missing.status_code, status.HTTP_400_BAD_REQUEST)

        too_long = self.client.put(
            f'{API}/reports/{self.pending.id}/add-notes', {'notes': 'x' * 1001}, format='json',
        )
        self.assertEqual(too_long.status_code, status.HTTP_400_BAD_REQUEST)
        self.pending.refresh_from_db()
        self.assertIsNone(self.pending.doctor_notes)

    def test_add_notes_missing_report(self):
        response = self.client.put(f'{API}/reports/99999/add-notes', {'notes': 'A'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_notes_keep_clinical_symbols(self):
        text = 'Hb < 12.5 g/dL & BP 140/90'
        added = self.client.put(f'{API}/reports/{self.pending.id}/add-notes', {'notes': text}, format='json')
        self.assertEqual(added.status_code, status.HTTP_200_OK)
        self.assertEqual(added.data['doctorNotes'], text)

        payload = {'donorId': self.donor.id, 'doctorId': self.doctor.id, 'doctorNotes': text}
        created = self.client.post(f'{API}/reports', payload, format='json')
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        fetched = self.client.get(f"{API}/reports/{created.data['id']}")
        self.assertEqual(fetched.data['doctorNotes'], text)

    def test_notes_markup_is_stripped(self):
        response = self.client.put(
            f'{API}/reports/{self.pending.id}/add-notes', {'notes': '<b>Iron</b> low'}, format='json',
        )
        self.assertEqual(response.data['doctorNotes'], 'Iron low')

    def test_created_notes_stay_within_limit(self):
        payload = {'donorId': self.donor.id, 'doctorId': self.doctor.id, 'doctorNotes': '&' * 1000}
        response = self.client.post(f'{API}/reports', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        stored = DonorMedicalReport.objects.get(pk=response.data['id']).doctor_notes
        self.assertEqual(stored, '&' * 1000)

        payload['doctorNotes'] = '&' * 1001
        too_long = self.client.post(f'{API}/reports', payload, format='json')
        self.assertEqual(too_long.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('doctorNotes', too_long.data['details'])

    # --- donor lookups -----------------------------------------------------

    def test_donor_report_and_exists(self):
        response = self.client.get(f'{API}/reports/donor/{self.donor.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], self.pending.id)
        self.assertEqual(response.data['donorId'], self.donor.id)

        exists = self.client.get(f'{API}/reports/donor/{self.donor.id}/exists')
        self.assertEqual(exists.status_code, status.HTTP_200_OK)
        self.assertIs(exists.data, True)

    def test_donor_without_report(self):
        lonely = Donor.objects.create(name='Ruwan Bandara')
        self.assertEqual(self.client.get(f'{API}/reports/donor/{lonely.id}').status_code, 404)
        self.assertEqual(self.client.get(f'{API}/reports/donor/{lonely.id}/latest').status_code, 404)
        exists = self.client.get(f'{API}/reports/donor/{lonely.id}/exists')
        self.assertEqual(exists.status_code, status.HTTP_200_OK)
        self.assertIs(exists.data, False)

    def test_donor_latest_report(self):
        past = timezone.now() - timedelta(days=10)
        DonorMedicalReport.objects.filter(pk=self.approved.pk).update(created_at=past)
        response = self.client.get(f'{API}/reports/donor/{self.other_donor.id}/latest')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], self.approved_too.id)

    # --- lists -------------------------------------------------------------

    def test_reports_by_doctor(self):
        response = self.client.get(f'{API}/reports/doctor/{self.doctor.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 3)
        empty = self.client.get(f'{API}/reports/doctor/{self.other_doctor.id}')
        self.assertEqual(empty.status_code, status.HTTP_200_OK)
        self.assertEqual(empty.data, [])

    def test_approved_and_unapproved(self):
        approved = self.client.get(f'{API}/reports/approved')
        unapproved = self.client.get(f'{API}/reports/unapproved')
        self.assertEqual({r['id'] for r in approved.data}, {self.approved.id, self.approved_too.id})
        self.assertEqual([r['id'] for r in unapproved.data], [self.pending.id])

    def test_reports_by_status(self):
        response = self.client.get(f'{API}/reports/status/Fit%20to%20Donate')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)
        none = self.client.get(f'{API}/reports/status/Unfit')
        self.assertEqual(none.data, [])

    def test_reports_by_appointment_range(self):
        when = timezone.now().replace(microsecond=0) + timedelta(days=2)
        DonorMedicalReport.objects.filter(pk=self.pending.pk).update(appointment_date=when)
        response = self.client.get(
            f'{API}/reports/appointments',
            {'start': when.isoformat(), 'end': (when + timedelta(hours=1)).isoformat()},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r['id'] for r in response.data], [self.pending.id])

        bad = self.client.get(f'{API}/reports/appointments', {'start': 'yesterday'})
        self.assertEqual(bad.status_code, status.HTTP_400_BAD_REQUEST)

    # --- create / update / delete -------------------------------------------

    def test_create_report(self):
        payload = {'donorId': self.donor.id, 'doctorId': self.other_doctor.id, 'healthStatus': 'Pending'}
        response = self.client.post(f'{API}/reports', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['donorId'], self.donor.id)
        self.assertEqual(response.data['doctorId'], self.other_doctor.id)
        self.assertEqual(response.data['healthStatus'], 'Pending')
        self.assertFalse(response.data['isApproved'])
        self.assertIsNotNone(response.data['createdAt'])

        fetched = self.client.get(f"{API}/reports/{response.data['id']}")
        self.assertEqual(fetched.status_code, status.HTTP_200_OK)
        for key in ('donorId', 'doctorId', 'healthStatus', 'isApproved', 'doctorNotes', 'appointmentDate'):
            self.assertEqual(fetched.data[key], response.data[key])

    def test_create_report_validation(self):
        response = self.client.post(f'{API}/reports', {'healthStatus': 'x' * 51}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        details = response.data['details']
        self.assertIn('donorId', details)
        self.assertIn('doctorId', details)
        self.assertIn('healthStatus', details)

    def test_create_report_with_unknown_donor(self):
        payload = {'donorId': 99999, 'doctorId': self.doctor.id}
        response = self.client.post(f'{API}/reports', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'reference_conflict')

    def test_update_report(self):
        payload = {
            'donorId': self.donor.id,
            'doctorId': self.other_doctor.id,
            'healthStatus': 'Deferred',
            'doctorNotes': 'Recheck in two weeks.',
        }
        response = self.client.put(f'{API}/reports/{self.pending.id}', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['id'], self.pending.id)
        self.assertEqual(response.data['doctorId'], self.other_doctor.id)
        self.assertEqual(response.data['healthStatus'], 'Deferred')
        self.pending.refresh_from_db()
        self.assertEqual(self.pending.doctor_notes, 'Recheck in two weeks.')

    def test_update_missing_report(self):
        payload = {'donorId': self.donor.id, 'doctorId': self.doctor.id}
        response = self.client.put(f'{API}/reports/99999', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_missing_report_with_invalid_body(self):
        response = self.client.put(f'{API}/reports/99999', {'healthStatus': 'x' * 51}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_report(self):
        response = self.client.delete(f'{API}/reports/{self.pending.id}')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(DonorMedicalReport.objects.filter(pk=self.pending.id).exists())
        again = self.client.delete(f'{API}/reports/{self.pending.id}')
        self.assertEqual(again.status_code, status.HTTP_404_NOT_FOUND)

    def test_wrong_method_is_rejected(self):
        response = self.client.get(f'{API}/reports/{self.pending.id}/approve')
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertEqual(response.data['status'], 405)

    # --- statistics --------------------------------------------------------

    def test_statistics(self):
        response = self.client.get(f'{API}/statistics/{self.doctor.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'totalReports': 3, 'approvedReports': 2, 'rejectedReports': 1})

    def test_statistics_for_doctor_without_reports(self):
        response = self.client.get(f'{API}/statistics/{self.other_doctor.id}')
        self.assertEqual(response.data, {'totalReports': 0, 'approvedReports': 0, 'rejectedReports': 0})

    # --- unexpected failures ---------------------------------------------------

    def test_unhandled_error_is_generic_500(self):
        with mock.patch.object(
            report_views.service, 'get_approved_medical_reports',
            side_effect=RuntimeError('db password is hunter2'),
        ):
            response = self.client.get(f'{API}/reports/approved')
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'server_error')
        self.assertNotIn('hunter2', response.data['message'])


class DoctorDirectoryAPITests(APITestCase):
    def setUp(self) -> None:
        self.doctor = Doctor.objects.create(name='Dr. Sarah Johnson', specialization='Senior Doctor')
        self.donor = Donor.objects.create(name='Dilani Fernando')
        self.report = DonorMedicalReport.objects.create(donor=self.donor, doctor=self.doctor)

    def test_list_and_create(self):
        response = self.client.post(
            f'{API}/doctors', {'name': 'Dr. Asanka Silva', 'specialization': 'Hematology'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        listing = self.client.get(f'{API}/doctors')
        self.assertEqual([d['name'] for d in listing.data], ['Dr. Sarah Johnson', 'Dr. Asanka Silva'])

    def test_create_validation(self):
        response = self.client.post(
            f'{API}/doctors', {'name': '  ', 'specialization': 'x' * 51}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('name', response.data['details'])
        self.assertIn('specialization', response.data['details'])

    def test_create_name_with_ampersands_fits_column(self):
        response = self.client.post(
            f'{API}/doctors', {'name': '&' * 100, 'specialization': 'Hematology'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Doctor.objects.get(pk=response.data['id']).name, '&' * 100)

        too_long = self.client.post(
            f'{API}/doctors', {'name': '&' * 101, 'specialization': 'Hematology'}, format='json',
        )
        self.assertEqual(too_long.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('name', too_long.data['details'])

    def test_update(self):
        response = self.client.put(
            f'{API}/doctors/{self.doctor.id}', {'specialization': 'Transfusion Medicine'}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Dr. Sarah Johnson')
        self.assertEqual(response.data['specialization'], 'Transfusion Medicine')

    def test_delete_cascades_reports(self):
        response = self.client.delete(f'{API}/doctors/{self.doctor.id}')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(DonorMedicalReport.objects.filter(pk=self.report.id).exists())
        self.assertEqual(self.client.get(f'{API}/doctors/{self.doctor.id}').status_code, 404)


class HealthzTests(APITestCase):
    def test_healthz(self):
        response = self.client.get('/healthz')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'ok': True, 'db': True})

"""
Management command to populate the database with sample donors and reports.
"""
import random
from datetime import timedelta

from django.core.management import call_command
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from doctor.models import Doctor, Donor, DonorMedicalReport

BLOOD_TYPES = ['O-', 'O+', 'A-', 'A+', 'B-', 'B+', 'AB-', 'AB+']
FIRST_NAMES = ['Nimal', 'Kamala', 'Ruwan', 'Dilani', 'Asanka', 'Tharushi', 'Chamara', 'Ishara']
LAST_NAMES = ['Perera', 'Fernando', 'Silva', 'Jayasinghe', 'Bandara', 'Wickramasinghe']
PENDING_STATUSES = ['Pending', 'Needs Review', 'Low Hemoglobin']
SAMPLE_NOTES = [
    'Hemoglobin within normal range.',
    'Blood pressure slightly elevated, recheck before donation.',
    'Donor reports recent travel; no symptoms.',
    'Weight above minimum threshold.',
]


class Command(BaseCommand):
    help = 'Populate database with sample donors and medical reports'

    def add_arguments(self, parser):
        parser.add_argument('--donors', type=int, default=20, help='number of donors to create')
        parser.add_argument('--seed', type=int, default=None, help='random seed for repeatable data')
        parser.add_argument('--reset', action='store_true', help='delete existing donors and reports first')

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        self.stdout.write('Creating sample data...')

        call_command('ensure_doctors', stdout=self.stdout)
        doctors = list(Doctor.objects.order_by('id'))

        with transaction.atomic():
            if options['reset']:
                deleted, _ = Donor.objects.all().delete()
                self.stdout.write(f'Removed {deleted} donor/report rows')

            donors = self.create_donors(rng, options['donors'])
            reports = self.create_reports(rng, donors, doctors)

        self.stdout.write(self.style.SUCCESS(
            f'Created {len(donors)} donors and {len(reports)} medical reports'
        ))

    def create_donors(self, rng, count):
        donors = []
        for _ in range(count):
            donors.append(Donor.objects.create(
                name=f'{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}',
                blood_type=rng.choice(BLOOD_TYPES),
                phone=f'07{rng.randint(10000000, 99999999)}',
            ))
        return donors

    def create_reports(self, rng, donors, doctors):
        now = timezone.now()
        reports = []
        for donor in donors:
            # some donors have a history of several assessments
            for _ in range(rng.choice([1, 1, 1, 2, 3])):
                outcome = rng.random()
                if outcome < 0.4:
                    approved, status = True, DonorMedicalReport.FIT_TO_DONATE
                elif outcome < 0.6:
                    approved, status = False, DonorMedicalReport.UNFIT
                else:
                    approved, status = False, rng.choice(PENDING_STATUSES)
                reports.append(DonorMedicalReport.objects.create(
                    donor=donor,
                    doctor=rng.choice(doctors),
                    doctor_notes=rng.choice(SAMPLE_NOTES) if rng.random() < 0.7 else None,
                    health_status=status,
                    is_approved=approved,
                    appointment_date=now + timedelta(days=rng.randint(-30, 30), hours=rng.randint(8, 16)),
                ))
        return reports

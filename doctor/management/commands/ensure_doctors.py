# doctor/management/commands/ensure_doctors.py
from django.core.management.base import BaseCommand

from doctor.models import Doctor

SEED_DOCTORS = [
    ("Ms. Shanika Jayawardena", "Senior Doctor"),
    ("Dr. John Smith", "Senior Doctor"),
    ("Dr. Sarah Johnson", "Senior Doctor"),
]


class Command(BaseCommand):
    help = "Ensure the seed senior doctors exist (idempotent)."

    def handle(self, *args, **opts):
        for name, specialization in SEED_DOCTORS:
            doctor, created = Doctor.objects.get_or_create(
                name=name,
                defaults={"specialization": specialization},
            )
            if not created and doctor.specialization != specialization:
                doctor.specialization = specialization
                doctor.save(update_fields=["specialization", "updated_at"])
            state = "created" if created else "ok"
            self.stdout.write(self.style.SUCCESS(f"{state}: {name} ({specialization})"))
        self.stdout.write(self.style.SUCCESS("All seed doctors ensured."))

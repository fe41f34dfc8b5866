"""
Django admin registrations for the doctor app.

Lets staff inspect doctors, donors and medical reports through the
``/admin/`` URL during development and support work.
"""

from django.contrib import admin

from .models import Doctor, Donor, DonorMedicalReport


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'specialization', 'created_at')
    search_fields = ('name', 'specialization')


@admin.register(Donor)
class DonorAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'blood_type', 'phone')
    search_fields = ('name', 'phone')


@admin.register(DonorMedicalReport)
class DonorMedicalReportAdmin(admin.ModelAdmin):
    list_display = ('id', 'donor', 'doctor', 'health_status', 'is_approved', 'appointment_date', 'updated_at')
    list_filter = ('is_approved', 'health_status', 'doctor')
    search_fields = ('donor__name', 'doctor__name', 'health_status')
    readonly_fields = ('created_at', 'updated_at')

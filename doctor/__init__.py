"""Doctor application for the blood donation backend.

This package contains the report models, repositories, services,
serializers, views and route registrations used by senior doctors to
review donor medical reports.
"""

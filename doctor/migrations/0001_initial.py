from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Doctor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('specialization', models.CharField(max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'doctors',
            },
        ),
        migrations.CreateModel(
            name='Donor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('blood_type', models.CharField(blank=True, max_length=5)),
                ('phone', models.CharField(blank=True, max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'donors',
            },
        ),
        migrations.CreateModel(
            name='DonorMedicalReport',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('doctor_notes', models.TextField(blank=True, max_length=1000, null=True)),
                ('health_status', models.CharField(blank=True, db_index=True, max_length=50, null=True)),
                ('is_approved', models.BooleanField(db_index=True, default=False)),
                ('appointment_date', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='medical_reports', to='doctor.doctor')),
                ('donor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='medical_reports', to='doctor.donor')),
            ],
            options={
                'db_table': 'donor_medical_reports',
                'indexes': [
                    models.Index(fields=['donor', 'appointment_date'], name='idx_report_donor_appt'),
                    models.Index(fields=['doctor', 'is_approved'], name='idx_report_doctor_approved'),
                ],
            },
        ),
    ]

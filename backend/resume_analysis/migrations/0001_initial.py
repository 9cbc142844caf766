from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ResumeAnalysis',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('file_name', models.CharField(max_length=255)),
                ('file_size', models.PositiveIntegerField(blank=True, null=True)),
                ('resume_url', models.CharField(blank=True, max_length=500)),
                ('storage_public_id', models.CharField(blank=True, max_length=255)),
                ('job_role', models.CharField(max_length=100)),
                ('experience_level', models.CharField(choices=[('intern', 'Intern'), ('entry', 'Entry Level'), ('mid', 'Mid Level'), ('senior', 'Senior Level')], max_length=10)),
                ('job_description', models.TextField(blank=True, null=True)),
                ('analysis', models.JSONField(default=dict)),
                ('analysis_source', models.CharField(choices=[('ai', 'AI Analysis'), ('fallback', 'Rule-based Fallback')], default='fallback', max_length=10)),
                ('roadmap', models.JSONField(default=dict, help_text='generatedAt, totalEstimatedDuration and steps')),
                ('roadmap_source', models.CharField(choices=[('ai', 'AI Analysis'), ('fallback', 'Rule-based Fallback')], default='fallback', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='resume_analyses', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['user', '-created_at'], name='resume_user_created_idx')],
            },
        ),
    ]

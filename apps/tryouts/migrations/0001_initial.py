import django.core.validators
import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


SECTION_CHOICES = [
    ('vocabulary', 'Vocabulary (Moji-Goi)'),
    ('grammar_reading', 'Grammar & Reading'),
    ('listening', 'Listening (Choukai)'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='TestAttempt',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('level', models.CharField(choices=[('N5', 'N5 - Beginner'), ('N4', 'N4 - Elementary'), ('N3', 'N3 - Intermediate'), ('N2', 'N2 - Upper Intermediate'), ('N1', 'N1 - Advanced')], max_length=2)),
                ('status', models.CharField(choices=[('in_progress', 'In Progress'), ('completed', 'Completed')], db_index=True, default='in_progress', max_length=20)),
                ('questions_snapshot', models.JSONField(default=dict)),
                ('shuffle_seed', models.CharField(max_length=64)),
                ('started_at', models.DateTimeField(auto_now_add=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('total_score', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('is_passed', models.BooleanField(blank=True, null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tryout_attempts', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'tryout_attempts',
                'ordering': ['-started_at'],
                'indexes': [models.Index(fields=['user', 'level', 'status'], name='tryout_attempt_lookup_idx')],
                'constraints': [models.UniqueConstraint(condition=models.Q(('status', 'in_progress')), fields=('user', 'level'), name='unique_in_progress_attempt_per_level')],
            },
        ),
        migrations.CreateModel(
            name='UserAnswer',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('question_id', models.UUIDField(db_index=True)),
                ('section_type', models.CharField(choices=SECTION_CHOICES, max_length=20)),
                ('selected_choice', models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(4)])),
                ('is_flagged', models.BooleanField(default=False)),
                ('answered_at', models.DateTimeField(auto_now=True)),
                ('is_correct', models.BooleanField(blank=True, null=True)),
                ('attempt', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='answers', to='tryouts.testattempt')),
            ],
            options={
                'db_table': 'tryout_user_answers',
                'ordering': ['answered_at'],
                'constraints': [models.UniqueConstraint(fields=('attempt', 'question_id'), name='unique_answer_per_attempt_question')],
            },
        ),
        migrations.CreateModel(
            name='SectionSubmission',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('section_type', models.CharField(choices=SECTION_CHOICES, max_length=20)),
                ('submitted_at', models.DateTimeField(auto_now_add=True)),
                ('elapsed_seconds', models.PositiveIntegerField(default=0)),
                ('attempt', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='submissions', to='tryouts.testattempt')),
            ],
            options={
                'db_table': 'tryout_section_submissions',
                'ordering': ['submitted_at'],
                'constraints': [models.UniqueConstraint(fields=('attempt', 'section_type'), name='unique_submission_per_section')],
            },
        ),
        migrations.CreateModel(
            name='SectionScore',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('section_type', models.CharField(choices=SECTION_CHOICES, max_length=20)),
                ('raw_score', models.PositiveIntegerField(default=0)),
                ('raw_max_score', models.PositiveIntegerField(default=0)),
                ('normalized_score', models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MaxValueValidator(60)])),
                ('accuracy', models.DecimalField(decimal_places=4, default=0, max_digits=5)),
                ('reference_grade', models.CharField(choices=[('A', 'A'), ('B', 'B'), ('C', 'C')], max_length=1)),
                ('is_passed', models.BooleanField(default=False)),
                ('pass_threshold', models.PositiveSmallIntegerField(default=19)),
                ('attempt', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='section_scores', to='tryouts.testattempt')),
            ],
            options={
                'db_table': 'tryout_section_scores',
                'ordering': ['created_at'],
                'constraints': [models.UniqueConstraint(fields=('attempt', 'section_type'), name='unique_score_per_section')],
            },
        ),
    ]

import django.core.validators
import django.db.models.deletion
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Passage',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('content_type', models.CharField(choices=[('text', 'Text'), ('audio', 'Audio'), ('image', 'Image')], default='text', max_length=10)),
                ('title', models.CharField(blank=True, max_length=255)),
                ('content_text', models.TextField(blank=True)),
                ('media_url', models.URLField(blank=True, max_length=500)),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'db_table': 'jlpt_passages',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Question',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('level', models.CharField(choices=[('N5', 'N5 - Beginner'), ('N4', 'N4 - Elementary'), ('N3', 'N3 - Intermediate'), ('N2', 'N2 - Upper Intermediate'), ('N1', 'N1 - Advanced')], db_index=True, max_length=2)),
                ('section_type', models.CharField(choices=[('vocabulary', 'Vocabulary (Moji-Goi)'), ('grammar_reading', 'Grammar & Reading'), ('listening', 'Listening (Choukai)')], db_index=True, max_length=20)),
                ('mondai_number', models.PositiveIntegerField(default=1)),
                ('question_number', models.PositiveIntegerField(default=1)),
                ('question_text', models.TextField(blank=True)),
                ('question_type', models.CharField(choices=[('standard', 'Standard'), ('audio', 'Audio'), ('image', 'Image')], default='standard', max_length=20)),
                ('media_url', models.URLField(blank=True, max_length=500)),
                ('media_type', models.CharField(blank=True, choices=[('text', 'Text'), ('audio', 'Audio'), ('image', 'Image')], max_length=10)),
                ('correct_answer', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(4)])),
                ('difficulty', models.CharField(choices=[('easy', 'Easy'), ('medium', 'Medium'), ('hard', 'Hard')], default='medium', max_length=10)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('passage', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='questions', to='questions.passage')),
            ],
            options={
                'db_table': 'jlpt_questions',
                'ordering': ['level', 'section_type', 'mondai_number', 'question_number'],
                'indexes': [models.Index(fields=['level', 'section_type', 'is_active'], name='jlpt_question_pool_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('correct_answer__gte', 1), ('correct_answer__lte', 4)), name='jlpt_question_correct_answer_1_4')],
            },
        ),
        migrations.CreateModel(
            name='AnswerChoice',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('choice_number', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(4)])),
                ('choice_type', models.CharField(choices=[('text', 'Text'), ('audio', 'Audio'), ('image', 'Image')], default='text', max_length=10)),
                ('choice_text', models.CharField(blank=True, max_length=500)),
                ('choice_media_url', models.URLField(blank=True, max_length=500)),
                ('question', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='choices', to='questions.question')),
            ],
            options={
                'db_table': 'jlpt_answer_choices',
                'ordering': ['choice_number'],
                'constraints': [models.UniqueConstraint(fields=('question', 'choice_number'), name='unique_choice_number_per_question')],
            },
        ),
    ]

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('tryouts', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='testattempt',
            name='pass_threshold',
            field=models.PositiveSmallIntegerField(blank=True, null=True),
        ),
        migrations.AddField(
            model_name='testattempt',
            name='failure_reasons',
            field=models.JSONField(blank=True, default=list),
        ),
    ]

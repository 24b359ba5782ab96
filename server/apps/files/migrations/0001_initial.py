import django.utils.timezone
from django.db import migrations, models

import server.apps.files.identity


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.UUIDField(default=server.apps.files.identity.new_id, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('mime', models.CharField(help_text='Declared or sniffed MIME type', max_length=100)),
                ('bytes', models.PositiveBigIntegerField(help_text='Content size in bytes')),
                ('real_path', models.CharField(max_length=500)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('file_url', models.CharField(blank=True, max_length=500, null=True)),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'db_table': 'files',
                'ordering': ['-created_at'],
                'constraints': [models.CheckConstraint(condition=models.Q(('mime', ''), _negated=True), name='files_mime_not_empty')],
            },
        ),
    ]

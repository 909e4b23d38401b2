from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='LanguageLine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('group', models.CharField(blank=True, db_index=True, default='', max_length=255)),
                ('key', models.TextField()),
                ('text', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'language line',
                'verbose_name_plural': 'language lines',
                'db_table': 'language_lines',
                'ordering': ['id'],
            },
        ),
        migrations.AddConstraint(
            model_name='languageline',
            constraint=models.UniqueConstraint(fields=('group', 'key'), name='language_lines_group_key_unique'),
        ),
    ]

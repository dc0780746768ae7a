import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Repository",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
                (
                    "hash_algorithm",
                    models.CharField(
                        choices=[("sha1", "SHA-1"), ("sha256", "SHA-256")],
                        editable=False,
                        max_length=6,
                    ),
                ),
                ("default_branch", models.CharField(max_length=255)),
                ("owner", models.CharField(max_length=150)),
                ("pending_owner", models.CharField(blank=True, default="", max_length=150)),
            ],
        ),
        migrations.CreateModel(
            name="GitObject",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("hash", models.CharField(db_index=True, max_length=64)),
                ("data", models.BinaryField()),
                (
                    "repo",
                    models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="git_store.repository"),
                ),
            ],
            options={
                "unique_together": {("repo", "hash")},
            },
        ),
        migrations.CreateModel(
            name="Reference",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("hash", models.CharField(max_length=64)),
                ("position", models.PositiveIntegerField()),
                (
                    "repo",
                    models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to="git_store.repository"),
                ),
            ],
            options={
                "unique_together": {("repo", "name"), ("repo", "position")},
            },
        ),
    ]

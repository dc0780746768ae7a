from django.apps import AppConfig


class GitStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "git_store"
    verbose_name = "Git object store"

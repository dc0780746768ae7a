from django.db import models

from .hashing import ALGORITHMS


class Repository(models.Model):
    name = models.CharField(max_length=100, unique=True)
    hash_algorithm = models.CharField(max_length=6, choices=ALGORITHMS, editable=False)
    default_branch = models.CharField(max_length=255)
    owner = models.CharField(max_length=150)
    pending_owner = models.CharField(max_length=150, blank=True, default="")

    def __str__(self):
        return self.name


class GitObject(models.Model):
    repo = models.ForeignKey(Repository, on_delete=models.CASCADE)
    hash = models.CharField(max_length=64, db_index=True)
    data = models.BinaryField()

    class Meta:
        unique_together = ('repo', 'hash')


class Reference(models.Model):
    """Stores branch pointers like 'refs/heads/main'.

    ``position`` is the 1-based slot of the ref in the listing order.
    """
    repo = models.ForeignKey(Repository, on_delete=models.CASCADE)
    name = models.CharField(max_length=255)
    hash = models.CharField(max_length=64)
    position = models.PositiveIntegerField()

    class Meta:
        unique_together = [('repo', 'name'), ('repo', 'position')]

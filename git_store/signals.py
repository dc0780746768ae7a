"""Observations sent after a mutation commits.

``object_added`` carries ``repository`` and ``hash``; ``reference_changed``
carries ``repository``, ``name``, ``hash`` and ``previous_hash``. Hashes are
32-byte values and a zero hash means "absent". The sender is the
``Repository`` class.
"""
from django.dispatch import Signal

object_added = Signal()
reference_changed = Signal()

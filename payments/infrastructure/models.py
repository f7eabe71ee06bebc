"""
ProcessedPaymentEvent model.
"""
import uuid

from django.db import models
from django.utils import timezone


class ProcessedPaymentEvent(models.Model):
    """
    Ledger row for a provider event id that has been reconciled.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.CharField(max_length=255, unique=True)
    event_type = models.CharField(max_length=100)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "payment_events"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.event_type} {self.event_id}"

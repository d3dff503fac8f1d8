from django.db import models
from django.utils import timezone


class JobLock(models.Model):
    """
    Database lock for scheduled management commands.

    An external scheduler may fire the same job twice (overlapping cron
    windows, several app containers). The unique ``job_name`` makes the
    second run fail to acquire the lock and exit quietly.
    """

    job_name = models.CharField(
        max_length=100, unique=True, help_text="Unique identifier for the scheduled job"
    )
    locked_by = models.CharField(
        max_length=100, help_text="Host identifier (hostname + process ID)"
    )
    locked_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the lock was acquired",
    )
    expires_at = models.DateTimeField(
        help_text="When the lock expires (a crashed run must not block the job forever)"
    )

    class Meta:
        db_table = "job_locks"
        verbose_name = "Job lock"
        verbose_name_plural = "Job locks"

    def __str__(self):
        return f"{self.job_name} ({self.locked_by})"

    def is_expired(self):
        return timezone.now() > self.expires_at

    @classmethod
    def cleanup_expired_locks(cls):
        """Remove expired locks and return how many were removed."""
        deleted, _ = cls.objects.filter(expires_at__lt=timezone.now()).delete()
        return deleted

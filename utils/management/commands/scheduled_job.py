import os
import socket
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import IntegrityError, transaction
from django.utils import timezone

from utils.models import JobLock


class ScheduledJobCommand(BaseCommand):
    """
    Base class for management commands triggered by an external scheduler.

    Wraps ``execute_job`` in a database lock so overlapping invocations of
    the same job do not run twice.

    Usage:
        class Command(ScheduledJobCommand):
            job_name = "weekly_summary"
            max_execution_time = timedelta(minutes=30)

            def execute_job(self, *args, **options):
                ...
    """

    job_name = None
    max_execution_time = timedelta(hours=1)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.job_name:
            raise ValueError(f"{self.__class__.__name__} must define job_name")

        self.host_id = f"{socket.gethostname()}-{os.getpid()}"
        self.lock_acquired = False
        self.verbosity = 1
        self.dry_run = False

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Run even if another run holds the lock (debugging only)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be done without actually doing it",
        )

    def handle(self, *args, **options):
        self.verbosity = options.get("verbosity", 1)
        self.dry_run = options.get("dry_run", False)
        force = options.get("force", False)

        if self.dry_run:
            self.stdout.write(
                self.style.NOTICE(f"DRY RUN: {self.job_name} (no changes will be made)")
            )

        JobLock.cleanup_expired_locks()

        if not self.dry_run and not force and not self.acquire_lock():
            return

        try:
            start_time = timezone.now()
            self.stdout.write(self.style.NOTICE(f"Starting {self.job_name}"))
            result = self.execute_job(*args, **options)
            elapsed = timezone.now() - start_time
            self.stdout.write(
                self.style.SUCCESS(
                    f"Completed {self.job_name} in {elapsed.total_seconds():.2f}s"
                )
            )
            return result
        except Exception as e:
            self.stdout.write(self.style.ERROR(f"Job {self.job_name} failed: {e}"))
            raise
        finally:
            if self.lock_acquired:
                self.release_lock()

    def acquire_lock(self):
        """
        Try to take the lock for this job.

        Returns:
            bool: True if the lock is now held by this process.
        """
        expires_at = timezone.now() + self.max_execution_time
        try:
            with transaction.atomic():
                JobLock.objects.create(
                    job_name=self.job_name,
                    locked_by=self.host_id,
                    expires_at=expires_at,
                )
        except IntegrityError:
            existing = JobLock.objects.filter(job_name=self.job_name).first()
            holder = existing.locked_by if existing else "unknown"
            self.stdout.write(
                self.style.WARNING(f"Job {self.job_name} is already running on {holder}")
            )
            return False

        self.lock_acquired = True
        if self.verbosity >= 2:
            self.stdout.write(f"Acquired lock for {self.job_name}")
        return True

    def release_lock(self):
        JobLock.objects.filter(job_name=self.job_name, locked_by=self.host_id).delete()
        self.lock_acquired = False
        if self.verbosity >= 2:
            self.stdout.write(f"Released lock for {self.job_name}")

    def execute_job(self, *args, **options):
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement execute_job() method"
        )

    def log_info(self, message):
        if self.verbosity >= 1:
            self.stdout.write(self.style.NOTICE(message))

    def log_success(self, message):
        if self.verbosity >= 1:
            self.stdout.write(self.style.SUCCESS(message))

    def log_warning(self, message):
        if self.verbosity >= 1:
            self.stdout.write(self.style.WARNING(message))

    def log_error(self, message):
        self.stdout.write(self.style.ERROR(message))

"""Register the daily SMS jobs with the RQ scheduler."""

from django.core.management.base import BaseCommand

import django_rq

from core.constants import DAILY_QUESTIONS_JOB_ID, DAILY_REMINDER_JOB_ID
from core.jobs.sms_jobs import daily_questions_job, daily_reminder_job


class Command(BaseCommand):
    """Schedule the daily question and reminder jobs as cron jobs.

    Existing registrations with the same ids are replaced, so the command
    can run on every deploy. Cron strings are evaluated in UTC; the jobs
    themselves apply the local calendar and window.
    """

    help = "Register the daily questions and daily reminder cron jobs"

    def add_arguments(self, parser):
        """Add cron expression options."""
        parser.add_argument(
            "--questions-cron",
            default="0 * * * *",
            help="Cron expression for the daily questions job (default: hourly)",
        )
        parser.add_argument(
            "--reminder-cron",
            default="*/10 * * * *",
            help="Cron expression for the daily reminder job (default: every 10 min)",
        )
        parser.add_argument(
            "--queue",
            default="default",
            help="RQ queue the jobs are enqueued on",
        )

    def handle(self, *_args, **options):
        """Replace the scheduled jobs."""
        scheduler = django_rq.get_scheduler(options["queue"])
        job_ids = {DAILY_QUESTIONS_JOB_ID, DAILY_REMINDER_JOB_ID}

        for job in scheduler.get_jobs():
            if job.id in job_ids:
                scheduler.cancel(job)

        scheduler.cron(
            options["questions_cron"],
            func=daily_questions_job,
            id=DAILY_QUESTIONS_JOB_ID,
            queue_name=options["queue"],
        )
        scheduler.cron(
            options["reminder_cron"],
            func=daily_reminder_job,
            id=DAILY_REMINDER_JOB_ID,
            queue_name=options["queue"],
        )

        self.stdout.write(
            self.style.SUCCESS(
                f"Scheduled {DAILY_QUESTIONS_JOB_ID} ({options['questions_cron']}) "
                f"and {DAILY_REMINDER_JOB_ID} ({options['reminder_cron']})"
            )
        )

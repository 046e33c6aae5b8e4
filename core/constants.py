"""Constants used throughout the check-in notification service."""

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"

# Logging defaults
DEFAULT_SERVICE_NAME = "checkin-notifications"
DEFAULT_LOG_FILE_PATH = "./logs/checkin-notifications.log"

# Log fields whose values are phone numbers and must be masked
PHONE_LOG_FIELDS = frozenset({"phone", "phone_number", "to"})

# Scheduled job ids registered with the RQ scheduler
DAILY_QUESTIONS_JOB_ID = "checkin-notifications:daily-questions"
DAILY_REMINDER_JOB_ID = "checkin-notifications:daily-reminder"

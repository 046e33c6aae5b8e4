"""Check-in SMS notification service project package."""

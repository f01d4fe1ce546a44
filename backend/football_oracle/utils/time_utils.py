import os
from datetime import datetime
from pytz import timezone

DEFAULT_TIMEZONE = "Europe/London"

def get_app_timezone():
    """Timezone for logs, prompt dates and fixture grouping (APP_TIMEZONE)."""
    return timezone(os.getenv("APP_TIMEZONE", DEFAULT_TIMEZONE))

def get_current_time() -> datetime:
    """Get current time in the application timezone."""
    return datetime.now(get_app_timezone())

def to_local_date_str(moment: datetime) -> str:
    """Calendar date (YYYY-MM-DD) of an aware datetime in the application timezone."""
    return moment.astimezone(get_app_timezone()).strftime("%Y-%m-%d")

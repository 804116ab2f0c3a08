import time

def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds, the unit OTP expiries are stored in."""
    return int(time.time() * 1000)

def minutes_to_ms(minutes: int) -> int:
    return minutes * 60 * 1000

def describe_minutes(minutes: int) -> str:
    """Human lifetime for emails: 1440 -> '24 hours', 15 -> '15 minutes'."""
    if minutes % 60 == 0:
        hours = minutes // 60
        return "1 hour" if hours == 1 else f"{hours} hours"
    return "1 minute" if minutes == 1 else f"{minutes} minutes"

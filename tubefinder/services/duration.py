import re

_ISO_DURATION_RE = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?$")


def parse_duration(token: str | None) -> int:
    """Convert an ISO-8601 ``P#DT#H#M#S`` token to total seconds.

    Missing components count as zero; the day part only shows up on very long
    streams. Anything that does not parse yields 0.
    """
    if not token or not isinstance(token, str):
        return 0
    match = _ISO_DURATION_RE.match(token.strip())
    if not match:
        return 0
    days, hours, minutes, seconds = (int(group or 0) for group in match.groups())
    return days * 86400 + hours * 3600 + minutes * 60 + seconds


def format_seconds(seconds: int) -> str:
    """Render seconds as ``mm:ss``, or ``hh:mm:ss`` from one hour up."""
    seconds = max(int(seconds), 0)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def format_milliseconds(milliseconds: int | float) -> str:
    """Transcript offsets arrive in milliseconds."""
    return format_seconds(int(milliseconds // 1000) if milliseconds > 0 else 0)

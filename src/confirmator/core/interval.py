"""Human readable wait intervals for progress display."""


def format_interval(seconds: int) -> str:
    """Format a duration as SS, MM:SS, HH:MM:SS or DD:HH:MM:SS.

    Only the fields needed are emitted; each is zero padded to two
    digits except days, which have unbounded width. Only whole seconds are
    accepted; floats are rejected rather than truncated.

    >>> format_interval(0)
    '00'
    >>> format_interval(3661)
    '01:01:01'
    """
    if isinstance(seconds, bool) or not isinstance(seconds, int):
        raise TypeError(f"Interval must be whole seconds, got {seconds!r}")
    if seconds < 0:
        raise ValueError(f"Interval must be non-negative, got {seconds}")

    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)

    if days == 0 and hours == 0 and minutes == 0:
        return f"{secs:02d}"
    if days == 0 and hours == 0:
        return f"{minutes:02d}:{secs:02d}"
    if days == 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{days:02d}:{hours:02d}:{minutes:02d}:{secs:02d}"

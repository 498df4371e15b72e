# Formats elapsed seconds as MM:SS for the timer rows. Minutes keep counting past 59, negative values clamp to zero.
def format_clock(seconds):
    seconds = max(0, int(seconds))
    m, s = divmod(seconds, 60)
    return f"{m:02d}:{s:02d}"


# Formats elapsed seconds as a compact duration such as "1h2m3s", "4m0s" or "12s". Used for dumps, where the
# value should still read naturally once opened in a spreadsheet.
def format_duration(seconds):
    seconds = max(0, int(seconds))
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    if h:
        return f"{h}h{m}m{s}s"
    if m:
        return f"{m}m{s}s"
    return f"{s}s"

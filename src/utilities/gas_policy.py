# File: src/utilities/gas_policy.py
"""Gas and capture evaluation policy.

Pure functions over airlock records and live sensor readings. The cycle
controller feeds them the previous tick's cached values; nothing here
keeps state between calls.
"""


def room_o2(record):
    """Mean oxygen level over the airlock's vents (0.0 with no vents)."""
    vents = record.vents
    if not vents:
        return 0.0
    return sum(v.oxygen_level() for v in vents) / len(vents)


def proc_fill(tank):
    """Fill ratio of a process tank."""
    return float(tank.filled_ratio)


def any_vent_can_pressurize(record):
    """True if at least one vent reports its room can hold pressure."""
    return any(v.can_pressurize for v in record.vents)


def is_capturing(last_o2, o2, last_fill, fill, settings):
    """Depressurization is making progress.

    Room oxygen fell by more than O2_DROP_EPSILON since the last tick, or
    the capture tank gained more than MIN_PROC_DELTA.
    """
    return (last_o2 - o2) > settings.O2_DROP_EPSILON or (fill - last_fill) > settings.MIN_PROC_DELTA


def depressurize_complete(timeout, o2, capturing, settings):
    """Decide whether the outer door may open.

    Never before MIN_DEPRESS_TICKS. After that: hard vacuum, the safety cap,
    or still capturing while inside CAPTURE_BAND above vacuum.
    """
    if timeout < settings.MIN_DEPRESS_TICKS:
        return False
    if o2 <= settings.VAC_OK or timeout >= settings.TIMEOUT_TICKS:
        return True
    return capturing and o2 <= settings.VAC_OK + settings.CAPTURE_BAND


def update_stability(stable, last_o2, o2, settings):
    """Count consecutive flat-or-rising readings; any real drop resets to 0."""
    if o2 >= last_o2 - settings.STABLE_EPSILON:
        return stable + 1
    return 0


def pressurize_complete(timeout, o2, start_o2, stable, can_pressurize, settings):
    """Decide whether pressurization has finished.

    Never before MIN_PRESS_TICKS. After that: breathable and stable, or
    risen by MIN_O2_DELTA with a vent still able to pressurize and stable,
    or the safety cap.
    """
    if timeout < settings.MIN_PRESS_TICKS:
        return False
    stable_ok = stable >= settings.STABLE_TICKS
    full_ok = o2 >= settings.PRESS_OK and stable_ok
    has_risen = o2 >= start_o2 + settings.MIN_O2_DELTA
    return (full_ok
            or (has_risen and can_pressurize and stable_ok)
            or timeout >= settings.TIMEOUT_TICKS)

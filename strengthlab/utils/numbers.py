from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value, places=0):
    """Round like a spreadsheet does: 12.5 -> 13, not 12."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)


def clamp(value, lower=0, upper=100):
    return max(lower, min(upper, value))


def is_filled(value) -> bool:
    """True when a submitted field carries an actual answer.

    ``None``, ``False``, blank strings and zero measurements all count as
    not filled in.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value.strip() not in ("", "0")
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    return True


def percentage_increase(baseline, current):
    """Percent change from ``baseline`` to ``current``, ``None`` when undefined."""
    if baseline is None or current is None or baseline <= 0:
        return None
    return round_half_up((current - baseline) / baseline * 100, 2)

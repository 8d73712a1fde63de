"""Display formatting for currency and rates."""


def money(x, decimals=0):
    """Format ``x`` as dollars, e.g. ``$8,205`` or ``-$1,234``."""
    v = float(x)
    sign = "-" if v < 0 and round(abs(v), decimals) != 0 else ""
    return f"{sign}${abs(v):,.{decimals}f}"


def signed_money(x, decimals=0):
    """Like ``money`` but always carries a sign: ``+$1,234`` / ``-$1,234``."""
    v = float(x)
    if v < 0 and round(abs(v), decimals) != 0:
        return money(v, decimals)
    return "+" + money(abs(v), decimals)


def delta_direction(x):
    return "up" if float(x) >= 0 else "down"


def pct(x, decimals=0):
    return f"{float(x):,.{decimals}f}%"


def bps(x):
    v = float(x)
    if v == int(v):
        return f"{int(v)} bps"
    return f"{v:g} bps"

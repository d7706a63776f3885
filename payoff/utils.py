# payoff/utils.py
def money(x: float, symbol: str = "$") -> str:
    try:
        return f"{symbol}{x:,.2f}"
    except Exception:
        return f"{symbol}{x}"


def months_label(months: int) -> str:
    return f"{months} months ({months/12:.1f} years)"

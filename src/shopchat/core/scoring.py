"""Product comparison: spec diffs and a single recommendation.

Pure functions, no I/O.
"""

from .models import Comparison, Product

_DEFAULT_NAME_A = "Product A"
_DEFAULT_NAME_B = "Product B"


def display_value(value: object) -> str:
    """Render a possibly missing spec value."""
    return "n/a" if value is None else str(value)


def diffs(a: Product, b: Product) -> list[str]:
    """One line per spec that differs; a missing value differs from any value."""
    lines: list[str] = []
    if a.price != b.price:
        lines.append(
            f"Price: {display_value(a.name)} ${display_value(a.price)} vs {display_value(b.name)} ${display_value(b.price)}"
        )
    if a.battery_hours != b.battery_hours:
        lines.append(
            f"Battery (hours): {display_value(a.battery_hours)} vs {display_value(b.battery_hours)}"
        )
    if a.ram_gb != b.ram_gb:
        lines.append(f"RAM (GB): {display_value(a.ram_gb)} vs {display_value(b.ram_gb)}")
    if a.storage_gb != b.storage_gb:
        lines.append(f"Storage (GB): {display_value(a.storage_gb)} vs {display_value(b.storage_gb)}")
    if a.rating != b.rating:
        lines.append(f"Rating: {display_value(a.rating)} vs {display_value(b.rating)}")
    return lines


def score(p: Product) -> float:
    """``2*rating + battery_hours/10 + ram_gb/2 - price/200``; missing counts as 0."""
    return (
        (p.rating or 0) * 2
        + (p.battery_hours or 0) / 10
        + (p.ram_gb or 0) / 2
        - (p.price or 0) / 200
    )


def recommendation(a: Product, b: Product) -> str:
    """Name of the higher scorer. A tie goes to ``b``."""
    if score(a) > score(b):
        return a.name or _DEFAULT_NAME_A
    return b.name or _DEFAULT_NAME_B


def compare_products(a: Product, b: Product) -> Comparison:
    return Comparison(diffs=diffs(a, b), recommendation=recommendation(a, b))

"""
Egg count unit conversion.

Eggs are counted in nested denominations: a case (petti) holds 360 eggs and
a tray holds 30.
"""
from poultry_dashboard.domain.models import (
    EggCategories,
    EggCategoryProduction,
    EggStock,
)

EGGS_PER_CASE = 360
EGGS_PER_TRAY = 30


def total_eggs(stock: EggStock) -> int:
    """
    Convert an egg stock to a total egg count.

    No bounds checking: negative components propagate into the total.
    """
    return stock.case * EGGS_PER_CASE + stock.tray * EGGS_PER_TRAY + stock.loose


def denominate(total: int) -> EggStock:
    """
    Split a total egg count into cases, trays and loose eggs.

    Non-negative totals use greedy decomposition. A negative total is
    decomposed by magnitude and every component carries the sign, so
    ``total_eggs(denominate(t)) == t`` holds for any integer.
    """
    sign = -1 if total < 0 else 1
    magnitude = abs(total)
    return EggStock(
        case=sign * (magnitude // EGGS_PER_CASE),
        tray=sign * ((magnitude % EGGS_PER_CASE) // EGGS_PER_TRAY),
        loose=sign * (magnitude % EGGS_PER_TRAY),
    )


def closing_total(production: EggCategoryProduction) -> int:
    return total_eggs(production.opening) + total_eggs(production.today) - total_eggs(production.sale)


def closing_stock(production: EggCategoryProduction) -> EggStock:
    """Closing stock for one category: opening + today - sale, renormalized."""
    return denominate(closing_total(production))


def report_total_eggs(report: EggCategories) -> int:
    """Eggs produced today across every size category of a report."""
    return sum(total_eggs(production.today) for production in report.categories().values())

from decimal import Decimal, ROUND_HALF_UP, getcontext

getcontext().prec = 28
CENTS = Decimal("0.01")


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def split_evenly(amount: Decimal, count: int) -> Decimal:
    """
    Share of ``amount`` for each of ``count`` beneficiaries.

    Not rounded to cents, the balance engine absorbs the sub-cent
    remainder within its tolerance.
    """
    if count <= 0:
        raise ValueError("Cannot split an amount across zero beneficiaries")
    return Decimal(amount) / count

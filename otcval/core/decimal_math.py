"""Pure-Decimal exp and ln for curve interpolation.

Both functions compute at DECIMAL_CONTEXT precision plus guard digits and
round back, so interpolated discount factors stay in Decimal end to end.

exp_d : Decimal -> Decimal   (Taylor series with range reduction)
ln_d  : Decimal -> Decimal   (range reduction + atanh series; ValueError on x <= 0)
"""

from __future__ import annotations

from decimal import Decimal, localcontext

from otcval.core.money import DECIMAL_CONTEXT

_GUARD_DIGITS = 10
_INTERNAL_PREC = DECIMAL_CONTEXT.prec + _GUARD_DIGITS

_ZERO = Decimal("0")
_ONE = Decimal("1")
_TWO = Decimal("2")
_HALF = Decimal("0.5")


def _to_output(value: Decimal) -> Decimal:
    with localcontext(DECIMAL_CONTEXT):
        return value + _ZERO  # forces rounding to prec=28


def _ln2(prec: int) -> Decimal:
    """ln(2) = 2 * atanh(1/3)."""
    with localcontext(DECIMAL_CONTEXT) as ctx:
        ctx.prec = prec + 5
        third = _ONE / Decimal(3)
        third_sq = third * third
        term = third
        result = third
        for k in range(1, 300):
            term = term * third_sq
            contrib = term / Decimal(2 * k + 1)
            result = result + contrib
            if abs(contrib) < Decimal(10) ** (-(ctx.prec + 2)):
                break
        return result * _TWO


def exp_d(x: Decimal) -> Decimal:
    """exp(x): write x = k*ln2 + r with |r| <= ln2/2, then 2^k * taylor(r)."""
    if x == _ZERO:
        return _ONE
    with localcontext(DECIMAL_CONTEXT) as ctx:
        ctx.prec = _INTERNAL_PREC
        ln2 = _ln2(ctx.prec)
        k = int((x / ln2).to_integral_value())
        r = x - Decimal(k) * ln2

        exp_r = _ONE
        term = _ONE
        for n in range(1, 200):
            term = term * r / Decimal(n)
            exp_r = exp_r + term
            if abs(term) < Decimal(10) ** (-(ctx.prec + 2)):
                break

        result = exp_r * (_TWO ** k) if k >= 0 else exp_r / (_TWO ** (-k))
        return _to_output(result)


def ln_d(x: Decimal) -> Decimal:
    """ln(x) for x > 0.

    Scales x by powers of two into [0.5, 2), then
    ln(m) = 2 * atanh((m - 1) / (m + 1)).

    Raises ValueError if x <= 0.
    """
    if x <= _ZERO:
        raise ValueError(f"ln_d requires x > 0, got {x}")
    if x == _ONE:
        return _ZERO

    with localcontext(DECIMAL_CONTEXT) as ctx:
        ctx.prec = _INTERNAL_PREC
        val = x + _ZERO
        e = 0
        while val >= _TWO:
            val = val / _TWO
            e += 1
        while val < _HALF:
            val = val * _TWO
            e -= 1

        u = (val - _ONE) / (val + _ONE)
        u_sq = u * u
        term = u
        ln_val = u
        for k in range(1, 300):
            term = term * u_sq
            contrib = term / Decimal(2 * k + 1)
            ln_val = ln_val + contrib
            if abs(contrib) < Decimal(10) ** (-(ctx.prec + 2)):
                break
        ln_val = ln_val * _TWO

        return _to_output(ln_val + Decimal(e) * _ln2(ctx.prec))

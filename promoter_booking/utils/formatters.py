"""
Formatting utilities for API payloads and CLI output.
Brazilian conventions: dot for thousands, comma for decimals, DD/MM/YYYY.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from datetime import datetime
from typing import Union, Optional


def _group_thousands(integer_part: str) -> str:
    reversed_int = integer_part[::-1]
    groups = [reversed_int[i:i+3] for i in range(0, len(reversed_int), 3)]
    return '.'.join(groups)[::-1]


def num_br(value: Union[int, float, Decimal, str, None], decimals: Optional[int] = None) -> str:
    """
    Formata um número no padrão brasileiro, omitindo decimais não significativos.

    Examples:
        num_br(1500) -> "1.500"
        num_br(1500.5) -> "1.500,5"
        num_br(12, decimals=2) -> "12,00"
    """
    if value is None or value == "":
        return "-"

    try:
        num = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return "-"

    if decimals is not None:
        num = num.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
        text = f"{abs(num):.{decimals}f}"
    else:
        text = format(abs(num).normalize(), 'f')

    integer_part, _, decimal_part = text.partition(".")
    sign = "-" if num < 0 else ""
    formatted = _group_thousands(integer_part)
    if decimal_part:
        formatted = f"{formatted},{decimal_part}"
    return f"{sign}{formatted}"


def money_br(value: Union[int, float, Decimal, str, None], symbol: bool = True) -> str:
    """
    Formata um valor monetário no padrão brasileiro com exatamente 2 decimais.

    Args:
        value: Valor a formatar
        symbol: Se True, prefixa "R$ "

    Returns:
        String formatada ou "-" se inválido

    Examples:
        money_br(472) -> "R$ 472,00"
        money_br(Decimal('1234.5')) -> "R$ 1.234,50"
        money_br('0.005', symbol=False) -> "0,01"
    """
    if value is None or value == "":
        return "-"

    try:
        num = Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return "-"

    sign = "-" if num < 0 else ""
    integer_part, decimal_part = f"{abs(num):.2f}".split(".")
    formatted = f"{sign}{_group_thousands(integer_part)},{decimal_part}"
    return f"R$ {formatted}" if symbol else formatted


def datetime_br(value: Optional[datetime], with_time: bool = True) -> str:
    """
    Formata um datetime: DD/MM/YYYY HH:MM

    Examples:
        datetime_br(datetime(2026, 1, 12, 15, 30)) -> "12/01/2026 15:30"
        datetime_br(datetime(2026, 1, 12, 15, 30), with_time=False) -> "12/01/2026"
    """
    if value is None or not isinstance(value, datetime):
        return "-"

    if with_time:
        return value.strftime("%d/%m/%Y %H:%M")
    return value.strftime("%d/%m/%Y")

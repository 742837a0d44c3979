"""
Модуль контекста расчетов (Billing Context).

Отвечает за тарифы на номера и расчет стоимости проживания.
"""

from .domain import DEFAULT_NIGHTLY_RATES, BillingCalculator, RateTable

__all__ = [
    "DEFAULT_NIGHTLY_RATES",
    "BillingCalculator",
    "RateTable",
]

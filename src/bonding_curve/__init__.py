"""
bonding_curve — движок цен и котировок bonding curve

Чистые функции без состояния: по текущему supply и параметрам сделки
вычисляют цену, количество токенов/native currency, комиссии и price impact.
Не выполняет переводы, не хранит состояние, не обращается к сети.
"""

__version__ = "0.1.0"

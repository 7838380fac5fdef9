"""
pool-ledger — расчёт долей инвесторов в общем пуле капитала.

Чистый движок без I/O: entry ratio, стоимость доли, gains, комиссия,
batch снапшот и переходы состояния пула.
"""

__version__ = "1.0.0"

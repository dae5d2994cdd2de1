"""
numint — демонстратор численного интегрирования методом трапеций.

Вычисляет интеграл выбранной функции из фиксированного набора на одном или
нескольких интервалах конкурентно (asyncio tasks, потоки или пул), с
уведомлениями о прогрессе и кооперативной отменой.
"""

__version__ = "1.0.0"

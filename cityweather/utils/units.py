from math import copysign, floor
from typing import Optional


def round1(value: Optional[float]) -> Optional[float]:
    """
    소수 첫째 자리 반올림 (10배 한 값에서 0에서 먼 쪽으로 반올림)
    round1(2.25) == 2.3, round1(-2.25) == -2.3
    """
    if value is None:
        return None
    scaled = floor(abs(value) * 10 + 0.5)
    if not scaled:
        return 0.0
    return copysign(scaled, value) / 10


def c_to_f(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def f_to_c(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def describe_temperature(celsius: Optional[float]) -> str:
    """12.3 → "12.3°C (54.1°F)" """
    if celsius is None:
        return ""
    return f"{round1(celsius)}°C ({round1(c_to_f(celsius))}°F)"

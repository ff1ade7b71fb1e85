from datetime import date
from typing import Optional, Tuple


def calculate_age(birthday: date, today: Optional[date] = None) -> int:
    """Edad como diferencia de años calendario: año actual menos año de nacimiento."""
    today = today or date.today()
    return today.year - birthday.year


def birthday_bounds(min_age: int, max_age: int, today: Optional[date] = None) -> Tuple[date, date]:
    """
    Intervalo cerrado [desde, hasta] de fechas de nacimiento cuya edad
    (según calculate_age) cae en [min_age, max_age] en `today`.
    """
    today = today or date.today()
    return date(max(today.year - max_age, date.min.year), 1, 1), date(today.year - min_age, 12, 31)

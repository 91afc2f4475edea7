import random

MATRIC_MIN = 1_000_000_000
MATRIC_MAX = 9_999_999_999


def generate_matric_number(rng: random.Random | None = None) -> str:
    """Случайный 10-значный номер зачётки.

    Уникальность не гарантируется, её проверяет бэкенд.
    """
    rng = rng or random
    return str(rng.randint(MATRIC_MIN, MATRIC_MAX))

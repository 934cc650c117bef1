"""Rough grade estimate from the hardest acceleration in a session."""

from cruxring.config import CONFIG


def estimate_grade(max_magnitude: float) -> str:
    for floor, grade in CONFIG['grade']['bands']:
        if max_magnitude > floor:
            return grade
    return CONFIG['grade']['default']

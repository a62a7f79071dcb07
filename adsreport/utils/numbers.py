"""Numeric coercion for sinks that store typed cells."""
import math
from typing import Any, Iterable, List, Sequence, Set


def to_number(value: Any) -> Any:
    """
    Convert a numeric string to int or float.

    Graph metrics arrive as strings ("12", "34.50"). Values that are not
    numeric, or not finite ("NaN", "inf"), are returned unchanged.
    """
    if isinstance(value, bool) or not isinstance(value, str):
        return value
    text = value.strip()
    if not text:
        return value
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return value
    return number if math.isfinite(number) else value


def coerce_columns(
    matrix: Sequence[Sequence[Any]],
    numeric_headers: Iterable[str],
) -> List[List[Any]]:
    """
    Coerce the named columns of a header + rows matrix to numbers.

    Args:
        matrix: Header row followed by data rows
        numeric_headers: Headers of the columns to coerce

    Returns:
        New matrix; the header row is copied unchanged
    """
    if not matrix:
        return []
    header = list(matrix[0])
    wanted: Set[str] = set(numeric_headers)
    positions = [i for i, name in enumerate(header) if name in wanted]

    coerced = [header]
    for row in matrix[1:]:
        values = list(row)
        for i in positions:
            if i < len(values):
                values[i] = to_number(values[i])
        coerced.append(values)
    return coerced

# jurycore/apps/scoring/services/weights.py
from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List, Optional, Tuple

from jurycore.apps.core.errors import InvalidScoreRange, MissingRequiredField

# (campo, nombre, peso). 10 en todo = 100.
CRITERIA: Tuple[Tuple[str, str, int], ...] = (
    ("score1", "Design Content", 4),
    ("score2", "Color Application", 3),
    ("score3", "Technological Content", 2),
    ("score4", "Innovative Solution", 1),
)
WEIGHTS = tuple(weight for _, _, weight in CRITERIA)
SCORE_FIELDS = tuple(field for field, _, _ in CRITERIA)

MIN_SCORE = 1
MAX_SCORE = 10

_INT_TEXT = re.compile(r"-?[0-9]+")


def _check_score(position: int, value: Any) -> int:
    # bool es subclase de int: no cuenta como puntaje
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidScoreRange(
            f"El criterio {position} debe ser un entero entre {MIN_SCORE} y {MAX_SCORE}.",
            criterion=position, value=value,
        )
    if not MIN_SCORE <= value <= MAX_SCORE:
        raise InvalidScoreRange(
            f"El criterio {position} está fuera de rango ({MIN_SCORE}-{MAX_SCORE}).",
            criterion=position, value=value,
        )
    return value


def compute_weighted_total(score1, score2, score3, score4) -> int:
    """
    Total ponderado 10..100: score1*4 + score2*3 + score3*2 + score4*1.
    Valida de nuevo cada criterio (entero en [1, 10]).
    """
    scores = [_check_score(i, v) for i, v in enumerate((score1, score2, score3, score4), start=1)]
    return sum(s * w for s, w in zip(scores, WEIGHTS))


def compute_average(totals: Iterable[float]) -> Optional[float]:
    """Promedio a 2 decimales; None si no hay totales (sin evaluar != cero)."""
    values = [Decimal(str(t)) for t in totals]
    if not values:
        return None
    mean = sum(values) / len(values)
    return float(mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _coerce(position: int, value: Any) -> Any:
    # "7" (formularios / JSON como texto) -> 7; lo demás lo valida compute_weighted_total
    if isinstance(value, str):
        text = value.strip()
        if _INT_TEXT.fullmatch(text):
            return int(text)
        if not text:
            raise MissingRequiredField(f"Falta el criterio {position}.", criterion=position)
    return value


def parse_raw_scores(raw) -> List[int]:
    """
    Acepta {"score1": 7, ...}, {"1": 7, ...} o una lista de 4 valores.
    Devuelve [s1, s2, s3, s4] validados.
    """
    if raw is None:
        raise MissingRequiredField("Faltan los puntajes.")

    if isinstance(raw, dict):
        values = []
        for i, field in enumerate(SCORE_FIELDS, start=1):
            if field in raw:
                value = raw[field]
            elif str(i) in raw:
                value = raw[str(i)]
            elif i in raw:
                value = raw[i]
            else:
                raise MissingRequiredField(f"Falta el criterio {i}.", criterion=i)
            if value is None:
                raise MissingRequiredField(f"Falta el criterio {i}.", criterion=i)
            values.append(value)
    elif isinstance(raw, (list, tuple)):
        if len(raw) != len(SCORE_FIELDS):
            raise MissingRequiredField("Se esperaban 4 puntajes.", received=len(raw))
        values = list(raw)
        for i, value in enumerate(values, start=1):
            if value is None:
                raise MissingRequiredField(f"Falta el criterio {i}.", criterion=i)
    else:
        raise MissingRequiredField("Formato de puntajes inválido.")

    scores = [_coerce(i, v) for i, v in enumerate(values, start=1)]
    compute_weighted_total(*scores)
    return scores

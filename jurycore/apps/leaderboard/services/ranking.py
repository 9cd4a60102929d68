# jurycore/apps/leaderboard/services/ranking.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from jurycore.apps.accounts.context import Actor, require_admin
from jurycore.apps.accounts.models import Judge
from jurycore.apps.core.results import domain_operation
from jurycore.apps.scoring.models import ScoreRecord
from jurycore.apps.scoring.services.weights import compute_average, compute_weighted_total
from jurycore.apps.selections.scopes import Scope, parse_scope
from jurycore.apps.selections.services.lifecycle import is_finalized, selections_for, state_from

TIERS = ("gold", "silver", "bronze")
TIER_ORDINAL = "ordinal"


@dataclass(frozen=True)
class JudgeRef:
    id: int
    name: str


@dataclass(frozen=True)
class RankedSubmission:
    """Fila de entrada: una postulación del ámbito, en orden de selección."""
    submission_id: int
    title: str = ""
    submission_number: str = ""
    category_name: str = ""
    selection_id: Optional[int] = None
    selection_rank: Optional[int] = None


@dataclass
class JudgeScore:
    judge_id: int
    judge_name: str
    score_id: Optional[int]
    raw_scores: List[int]
    comments: str
    weighted_total: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "judgeId": self.judge_id,
            "judgeName": self.judge_name,
            "scoreId": self.score_id,
            "score1": self.raw_scores[0],
            "score2": self.raw_scores[1],
            "score3": self.raw_scores[2],
            "score4": self.raw_scores[3],
            "comments": self.comments,
            "weightedTotal": self.weighted_total,
        }


@dataclass
class ResultEntry:
    """
    Resultado derivado (no se guarda) de una postulación. `scores` va alineado
    con la lista de jurados; None = ese jurado aún no evaluó.
    """
    submission: RankedSubmission
    scores: List[Optional[JudgeScore]] = field(default_factory=list)
    average: Optional[float] = None
    position: int = 0
    tier: str = TIER_ORDINAL

    @property
    def totals(self) -> List[Optional[int]]:
        return [s.weighted_total if s else None for s in self.scores]

    def as_dict(self) -> Dict[str, Any]:
        sub = self.submission
        return {
            "submissionId": sub.submission_id,
            "title": sub.title,
            "submissionNumber": sub.submission_number,
            "categoryName": sub.category_name,
            "selectionId": sub.selection_id,
            "selectionRank": sub.selection_rank,
            "judgeScores": [s.as_dict() if s else None for s in self.scores],
            "totals": self.totals,
            "averageScore": self.average,
            "position": self.position,
            "tier": self.tier,
        }


def tier_for_position(position: int) -> str:
    """0/1/2 -> oro/plata/bronce; el resto ordinal. Solo depende de la posición."""
    return TIERS[position] if 0 <= position < len(TIERS) else TIER_ORDINAL


def _sort_key(entry: ResultEntry):
    # sin promedio al final; sorted() es estable -> empates respetan el rank de selección
    return (entry.average is None, -(entry.average or 0))


def build_results_matrix(
    submissions: Sequence[RankedSubmission],
    judges: Sequence[JudgeRef],
    score_records: Iterable[Any],
) -> List[ResultEntry]:
    """
    Arma la matriz postulación × jurado y la ordena por promedio.
    `score_records` son objetos con judge_id, submission_id, score1..score4,
    comments y pk (ej. ScoreRecord). Una postulación sin puntajes se devuelve
    igual, con average=None.
    """
    by_key: Dict[tuple, Any] = {}
    for rec in score_records:
        by_key[(rec.submission_id, rec.judge_id)] = rec

    entries: List[ResultEntry] = []
    for sub in submissions:
        row: List[Optional[JudgeScore]] = []
        for judge in judges:
            rec = by_key.get((sub.submission_id, judge.id))
            if rec is None:
                row.append(None)
                continue
            raw = [rec.score1, rec.score2, rec.score3, rec.score4]
            row.append(JudgeScore(
                judge_id=judge.id,
                judge_name=judge.name,
                score_id=getattr(rec, "pk", None),
                raw_scores=raw,
                comments=getattr(rec, "comments", "") or "",
                weighted_total=compute_weighted_total(*raw),
            ))
        average = compute_average([s.weighted_total for s in row if s is not None])
        entries.append(ResultEntry(submission=sub, scores=row, average=average))

    ranked = sorted(entries, key=_sort_key)
    for position, entry in enumerate(ranked):
        entry.position = position
        entry.tier = tier_for_position(position)
    return ranked


def judges_in_scope(scope: Scope) -> List[JudgeRef]:
    """Jurados con al menos un puntaje en el ámbito, por nombre."""
    qs = (
        Judge.objects.filter(score_records__scope=scope.key)
        .distinct()
        .order_by("full_name", "id")
    )
    return [JudgeRef(id=j.pk, name=j.full_name) for j in qs]


@domain_operation
def results_for_scope(actor: Optional[Actor], scope):
    require_admin(actor)
    scope = parse_scope(scope)

    submissions = [
        RankedSubmission(
            submission_id=sel.submission_id,
            title=sel.submission.title,
            submission_number=sel.submission.submission_number,
            category_name=sel.submission.category.name,
            selection_id=sel.pk,
            selection_rank=sel.rank,
        )
        for sel in selections_for(scope)
    ]
    judges = judges_in_scope(scope)
    records = ScoreRecord.objects.filter(
        scope=scope.key, submission_id__in=[s.submission_id for s in submissions]
    )
    results = build_results_matrix(submissions, judges, records)
    finalized = is_finalized(scope)

    rows = []
    for entry in results:
        row = entry.as_dict()
        # todas las filas están seleccionadas en el ámbito
        row["state"] = state_from(True, entry.average is not None, finalized)
        rows.append(row)

    return {
        "scope": scope.key,
        "label": scope.label,
        "finalized": finalized,
        "judges": [{"id": j.id, "name": j.name} for j in judges],
        "results": rows,
    }

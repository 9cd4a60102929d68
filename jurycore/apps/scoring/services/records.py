# jurycore/apps/scoring/services/records.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from django.db import transaction

from jurycore.apps.accounts.context import Actor, require_admin, require_judge
from jurycore.apps.accounts.models import Judge
from jurycore.apps.core.errors import MissingRequiredField, NotFound, Unauthorized
from jurycore.apps.core.results import domain_operation
from jurycore.apps.registration.models import Submission
from jurycore.apps.selections.scopes import parse_scope

from ..models import ScoreRecord
from .weights import parse_raw_scores

logger = logging.getLogger(__name__)


def _as_id(value, field: str) -> int:
    if value in (None, ""):
        raise MissingRequiredField(f"Falta {field}.", field=field)
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise MissingRequiredField(f"{field} inválido.", field=field)


@domain_operation
def record_score(
    actor: Optional[Actor],
    judge_id,
    submission_id,
    scope,
    raw_scores,
    comment: str = "",
):
    """
    Upsert del ScoreRecord (jurado, postulación, ámbito).
      - Un jurado solo puntúa por sí mismo; el admin puede hacerlo por cualquiera.
      - Se valida todo antes de tocar la BD.
    """
    actor = require_judge(actor)
    judge_id = actor.judge_id if judge_id in (None, "") else _as_id(judge_id, "judgeId")
    submission_id = _as_id(submission_id, "submissionId")
    if judge_id != actor.judge_id and not actor.is_admin:
        raise Unauthorized("Solo el administrador puede puntuar en nombre de otro jurado.")

    scope = parse_scope(scope)
    s1, s2, s3, s4 = parse_raw_scores(raw_scores)

    if not Judge.objects.filter(pk=judge_id).exists():
        raise NotFound("Jurado no encontrado.", judgeId=judge_id)
    if not Submission.objects.filter(pk=submission_id).exists():
        raise NotFound("Postulación no encontrada.", submissionId=submission_id)

    with transaction.atomic():
        record, created = ScoreRecord.objects.update_or_create(
            judge_id=judge_id,
            submission_id=submission_id,
            scope=scope.key,
            defaults={
                "score1": s1,
                "score2": s2,
                "score3": s3,
                "score4": s4,
                "comments": (comment or "").strip(),
            },
        )

    logger.info(
        "Puntaje %s: jurado=%s postulación=%s ámbito=%s total=%s (por %s)",
        "creado" if created else "actualizado",
        judge_id, submission_id, scope.key, record.weighted_total, actor.judge_id,
    )
    return {"score": record.as_dict(), "created": created}


@domain_operation
def delete_score(actor: Optional[Actor], score_id):
    require_admin(actor)
    score_id = _as_id(score_id, "scoreId")
    deleted, _ = ScoreRecord.objects.filter(pk=score_id).delete()
    if not deleted:
        logger.warning("Borrado de puntaje inexistente id=%s", score_id)
        raise NotFound("Puntaje no encontrado o ya eliminado.", scoreId=score_id)
    logger.info("Puntaje %s eliminado por %s", score_id, actor.judge_id)
    return {"scoreId": score_id}


@domain_operation
def scores_overview(actor: Optional[Actor], scope):
    """
    Para cada postulación evaluable del ámbito: las filas de puntaje de cada
    jurado (id, crudos, comentario, fechas) y la lista de jurados activos.
    """
    require_admin(actor)
    scope = parse_scope(scope)

    submissions = Submission.objects.eligible().select_related("category")
    if scope.category_id is not None:
        submissions = submissions.filter(category_id=scope.category_id)

    by_submission: Dict[int, List[Dict[str, Any]]] = {}
    records = (
        ScoreRecord.objects.filter(scope=scope.key, submission__in=submissions)
        .select_related("judge")
        .order_by("judge__full_name", "id")
    )
    for rec in records:
        row = rec.as_dict()
        row["judgeName"] = rec.judge.full_name
        by_submission.setdefault(rec.submission_id, []).append(row)

    items = []
    for sub in submissions:
        data = sub.as_dict()
        data["scores"] = by_submission.get(sub.pk, [])
        items.append(data)

    judges = [
        {"id": j.pk, "name": j.full_name}
        for j in Judge.objects.filter(is_active=True).order_by("full_name", "id")
    ]
    return {"scope": scope.key, "submissions": items, "judges": judges}

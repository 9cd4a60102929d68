# jurycore/apps/judging/services.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from jurycore.apps.accounts.context import Actor, require_judge
from jurycore.apps.accounts.models import METHOD_SCORING
from jurycore.apps.core.errors import MissingRequiredField, NotFound, SelectionLimitExceeded
from jurycore.apps.core.results import domain_operation
from jurycore.apps.registration.models import Category, Submission
from jurycore.apps.scoring.services.weights import SCORE_FIELDS, parse_raw_scores

from .models import JuryEvaluation

logger = logging.getLogger(__name__)


def _finalize_limit() -> int:
    return int(getattr(settings, "JURY_FINALIZE_LIMIT", 10))


def _require_method(actor: Actor) -> str:
    if not actor.evaluation_method:
        raise MissingRequiredField("Primero elija su método de evaluación.", field="evaluationMethod")
    return actor.evaluation_method


def _submission_id(value) -> int:
    if value in (None, ""):
        raise MissingRequiredField("Falta submissionId.", field="submissionId")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise MissingRequiredField("submissionId inválido.", field="submissionId")


@domain_operation
def list_submissions_for_judge(actor: Optional[Actor], category_id=None):
    """
    Postulaciones evaluables (más nuevas primero) con la evaluación del jurado
    incrustada: evaluated, selected, comentario y puntajes si corresponde.
    """
    actor = require_judge(actor)
    qs = (
        Submission.objects.eligible()
        .in_category(category_id)
        .select_related("category")
        .order_by("-created_at", "-id")
    )
    evaluations = {
        ev.submission_id: ev
        for ev in JuryEvaluation.objects.filter(judge_id=actor.judge_id, submission__in=qs)
    }

    items: List[Dict[str, Any]] = []
    for sub in qs:
        data = sub.as_dict()
        ev = evaluations.get(sub.pk)
        data["evaluated"] = ev is not None
        data["evaluation"] = ev.as_dict() if ev else None
        items.append(data)

    categories = [
        {"id": c.pk, "name": c.name} for c in Category.objects.filter(is_active=True)
    ]
    return {
        "method": actor.evaluation_method,
        "submissions": items,
        "categories": categories,
        "evaluatedCount": len(evaluations),
    }


@domain_operation
def save_evaluation(
    actor: Optional[Actor],
    submission_id,
    selected: bool = False,
    scores=None,
    comments: str = "",
    remove: bool = False,
):
    """
    Upsert de la evaluación (jurado, postulación). Con remove=True se borra.
    En método scoring los cuatro criterios son obligatorios y se validan.
    """
    actor = require_judge(actor)
    method = _require_method(actor)
    submission_id = _submission_id(submission_id)

    if remove:
        deleted, _ = JuryEvaluation.objects.filter(judge_id=actor.judge_id, submission_id=submission_id).delete()
        logger.info("Jurado %s quitó su evaluación de %s (%s)", actor.judge_id, submission_id, bool(deleted))
        return {"submissionId": submission_id, "removed": bool(deleted)}

    if not Submission.objects.eligible().filter(pk=submission_id).exists():
        raise NotFound("Postulación no encontrada.", submissionId=submission_id)

    values: Dict[str, Any] = {
        "evaluation_method": method,
        "selected": bool(selected),
        "comments": (comments or "").strip(),
    }
    if method == METHOD_SCORING:
        values.update(zip(SCORE_FIELDS, parse_raw_scores(scores)))
    else:
        values.update({f: None for f in SCORE_FIELDS})

    with transaction.atomic():
        evaluation, created = JuryEvaluation.objects.update_or_create(
            judge_id=actor.judge_id,
            submission_id=submission_id,
            defaults=values,
        )

    logger.info(
        "Jurado %s %s evaluación de %s (selected=%s)",
        actor.judge_id, "creó" if created else "actualizó", submission_id, evaluation.selected,
    )
    return {"evaluation": evaluation.as_dict(), "created": created}


@domain_operation
def selected_submissions(actor: Optional[Actor]):
    """Evaluaciones marcadas como seleccionadas; en scoring, por total descendente."""
    actor = require_judge(actor)
    evaluations = list(
        JuryEvaluation.objects.filter(judge_id=actor.judge_id, selected=True)
        .select_related("submission", "submission__category")
        .order_by("-submission__created_at", "-submission_id")
    )
    if actor.evaluation_method == METHOD_SCORING:
        evaluations.sort(key=lambda ev: (ev.weighted_total is None, -(ev.weighted_total or 0)))

    items = []
    for ev in evaluations:
        data = ev.submission.as_dict()
        data["evaluation"] = ev.as_dict()
        items.append(data)
    return {
        "method": actor.evaluation_method,
        "submissions": items,
        "finalizeLimit": _finalize_limit(),
    }


@domain_operation
def finalize_evaluations(actor: Optional[Actor], submission_ids):
    """
    Cierra las evaluaciones seleccionadas indicadas (máximo JURY_FINALIZE_LIMIT).
    Todas deben existir y estar seleccionadas; si no, no se toca ninguna.
    """
    actor = require_judge(actor)
    if not submission_ids:
        raise MissingRequiredField("Seleccione al menos una postulación.", field="submissionIds")
    if not isinstance(submission_ids, (list, tuple)):
        raise MissingRequiredField("submissionIds debe ser una lista.", field="submissionIds")

    ids = []
    for raw in submission_ids:
        sid = _submission_id(raw)
        if sid not in ids:
            ids.append(sid)

    limit = _finalize_limit()
    if len(ids) > limit:
        raise SelectionLimitExceeded(f"Máximo {limit} postulaciones por finalización.", limit=limit, received=len(ids))

    qs = JuryEvaluation.objects.filter(judge_id=actor.judge_id, submission_id__in=ids, selected=True)
    found = set(qs.values_list("submission_id", flat=True))
    missing = [i for i in ids if i not in found]
    if missing:
        raise NotFound("Hay postulaciones sin selección previa.", submissionIds=missing)

    now = timezone.now()
    with transaction.atomic():
        updated = qs.update(is_finalized=True, finalized_at=now)

    logger.info("Jurado %s finalizó %s evaluaciones", actor.judge_id, updated)
    return {"finalized": updated, "finalizedAt": now.isoformat()}

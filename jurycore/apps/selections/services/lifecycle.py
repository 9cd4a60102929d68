# jurycore/apps/selections/services/lifecycle.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from django.db import transaction
from django.utils import timezone

from jurycore.apps.accounts.context import Actor, require_admin
from jurycore.apps.core.errors import MissingRequiredField, NotFound, SelectionLimitExceeded
from jurycore.apps.core.results import domain_operation
from jurycore.apps.registration.models import Submission
from jurycore.apps.scoring.models import ScoreRecord

from ..models import ScopeFinalization, Selection
from ..scopes import Scope, parse_scope

logger = logging.getLogger(__name__)

STATE_ELIGIBLE = "Eligible"
STATE_SELECTED = "Selected"
STATE_SCORED = "Scored"
STATE_FINALIZED = "Finalized"


def _clean_ids(submission_ids) -> List[int]:
    if submission_ids is None:
        raise MissingRequiredField("Falta la lista de postulaciones.")
    if not isinstance(submission_ids, (list, tuple)):
        raise MissingRequiredField("submissionIds debe ser una lista.")
    ids: List[int] = []
    for raw in submission_ids:
        try:
            value = int(raw)
        except (TypeError, ValueError, OverflowError):
            raise MissingRequiredField("ID de postulación inválido.", value=raw)
        if isinstance(raw, (bool, float)) or value <= 0:
            raise MissingRequiredField("ID de postulación inválido.", value=raw)
        if value in ids:
            raise MissingRequiredField("Postulación repetida en la selección.", submissionId=value)
        ids.append(value)
    return ids


def scope_submissions(scope: Scope):
    """Postulaciones evaluables en el ámbito (las generales filtran por categoría)."""
    qs = Submission.objects.eligible().select_related("category")
    if scope.category_id is not None:
        qs = qs.filter(category_id=scope.category_id)
    return qs


def selections_for(scope: Scope):
    return (
        Selection.objects.filter(scope=scope.key)
        .select_related("submission", "submission__category")
        .order_by("rank", "id")
    )


def is_finalized(scope: Scope) -> bool:
    return ScopeFinalization.objects.filter(scope=scope.key).exists()


def _selection_row(sel: Selection) -> Dict[str, Any]:
    return {
        "id": sel.pk,
        "rank": sel.rank,
        "submissionId": sel.submission_id,
        "title": sel.submission.title,
        "submissionNumber": sel.submission.submission_number,
        "categoryName": sel.submission.category.name,
    }


@domain_operation
def select_for_scope(actor: Optional[Actor], scope, submission_ids):
    """
    Reemplaza TODO el conjunto del ámbito: borra e inserta en una sola
    transacción. Rank = posición (1-based) en la lista recibida.
    """
    actor = require_admin(actor)
    scope = parse_scope(scope)
    ids = _clean_ids(submission_ids)

    limit = scope.max_size
    if limit is not None and len(ids) > limit:
        raise SelectionLimitExceeded(
            f"Máximo {limit} postulaciones en {scope.label}.", limit=limit, received=len(ids)
        )

    found = set(scope_submissions(scope).filter(pk__in=ids).values_list("pk", flat=True))
    missing = [i for i in ids if i not in found]
    if missing:
        raise NotFound("Postulaciones no disponibles para este ámbito.", submissionIds=missing)

    with transaction.atomic():
        Selection.objects.filter(scope=scope.key).delete()
        Selection.objects.bulk_create([
            Selection(scope=scope.key, submission_id=sid, rank=index + 1, created_by_id=actor.judge_id)
            for index, sid in enumerate(ids)
        ])

    logger.info("Selección de %s reemplazada por %s: %s postulaciones", scope.key, actor.judge_id, len(ids))
    return {
        "scope": scope.key,
        "count": len(ids),
        "selections": [_selection_row(s) for s in selections_for(scope)],
    }


@domain_operation
def candidates_for_scope(actor: Optional[Actor], scope, category_id=None):
    """
    Listado para curaduría: evaluables (filtro opcional de categoría en Top)
    con is_selected; primero las seleccionadas, luego las más nuevas.
    """
    require_admin(actor)
    scope = parse_scope(scope)

    qs = scope_submissions(scope)
    if scope.category_id is None:
        qs = qs.in_category(category_id)

    selections = list(selections_for(scope))
    selected_ids = {s.submission_id for s in selections}
    scored_ids = set(ScoreRecord.objects.filter(scope=scope.key).values_list("submission_id", flat=True))
    finalized = is_finalized(scope)

    items = []
    for sub in qs.order_by("-created_at", "-id"):
        data = sub.as_dict()
        data["isSelected"] = sub.pk in selected_ids
        data["state"] = state_from(data["isSelected"], sub.pk in scored_ids, finalized)
        items.append(data)
    # sort estable: conserva "más nuevas primero" dentro de cada grupo
    items.sort(key=lambda d: not d["isSelected"])

    return {
        "scope": scope.key,
        "label": scope.label,
        "maxSize": scope.max_size,
        "finalized": finalized,
        "submissions": items,
        "selections": [_selection_row(s) for s in selections],
    }


@domain_operation
def finalize_scope(actor: Optional[Actor], scope):
    actor = require_admin(actor)
    scope = parse_scope(scope)
    marker, created = ScopeFinalization.objects.update_or_create(
        scope=scope.key,
        defaults={"finalized_at": timezone.now(), "finalized_by_id": actor.judge_id},
    )
    logger.info("Ámbito %s finalizado por %s", scope.key, actor.judge_id)
    return {
        "scope": scope.key,
        "finalizedAt": marker.finalized_at.isoformat(),
        "created": created,
    }


def state_from(selected: bool, scored: bool, finalized: bool) -> str:
    if selected and finalized:
        return STATE_FINALIZED
    if scored:
        return STATE_SCORED
    if selected:
        return STATE_SELECTED
    return STATE_ELIGIBLE


def submission_state(submission_id, scope=None) -> str:
    """
    Estado de una postulación (en un ámbito, o en cualquiera si scope es None):
    Finalized > Scored > Selected > Eligible.
    """
    if not Submission.objects.filter(pk=submission_id).exists():
        raise NotFound("Postulación no encontrada.", submissionId=submission_id)

    selections = Selection.objects.filter(submission_id=submission_id)
    scores = ScoreRecord.objects.filter(submission_id=submission_id)
    if scope is not None:
        scope = parse_scope(scope)
        selections = selections.filter(scope=scope.key)
        scores = scores.filter(scope=scope.key)

    selected_scopes = set(selections.values_list("scope", flat=True))
    finalized = bool(selected_scopes) and ScopeFinalization.objects.filter(scope__in=selected_scopes).exists()
    return state_from(bool(selected_scopes), scores.exists(), finalized)

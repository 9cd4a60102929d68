# jurycore/apps/accounts/services.py
from __future__ import annotations

import logging
from typing import Optional

from django.http import HttpRequest
from django.utils import timezone

from jurycore.apps.core.errors import EvaluationMethodLocked, MissingRequiredField, NotFound
from jurycore.apps.core.results import domain_operation

from .context import Actor, require_judge
from .models import EVALUATION_METHOD_CHOICES, Judge

logger = logging.getLogger(__name__)

SESSION_JUDGE_KEY = "judge_id"
VALID_METHODS = {value for value, _ in EVALUATION_METHOD_CHOICES}


def authenticate_pin(pin: str) -> Optional[Judge]:
    """
    Busca el jurado activo cuyo PIN coincide. Los PIN se guardan con hash,
    así que se comparan uno a uno (los jurados son pocos).
    """
    pin = (pin or "").strip()
    if not pin:
        return None
    for judge in Judge.objects.filter(is_active=True).order_by("id"):
        if judge.check_pin(pin):
            return judge
    logger.warning("Intento de ingreso con PIN inválido")
    return None


def login_judge(request: HttpRequest, judge: Judge) -> None:
    # Nueva sesión: solo guardamos el id; el resto se lee de BD en cada request
    request.session.cycle_key()
    request.session[SESSION_JUDGE_KEY] = judge.pk
    request.judge = judge
    request.actor = Actor.from_judge(judge)
    logger.info("Jurado %s ingresó (admin=%s)", judge.code, judge.is_admin)


def logout_judge(request: HttpRequest) -> None:
    request.session.flush()
    request.judge = None
    request.actor = None


def load_session_judge(request: HttpRequest) -> Optional[Judge]:
    judge_id = request.session.get(SESSION_JUDGE_KEY)
    if not judge_id:
        return None
    judge = Judge.objects.filter(pk=judge_id, is_active=True).first()
    if judge is None:
        # Jurado desactivado o eliminado: la sesión deja de valer
        request.session.pop(SESSION_JUDGE_KEY, None)
    return judge


@domain_operation
def choose_evaluation_method(actor: Optional[Actor], method: str):
    """
    Fija el método de evaluación del jurado. Solo se puede definir una vez:
    repetir el mismo método no hace nada; intentar cambiarlo es un error.
    """
    actor = require_judge(actor)
    method = (method or "").strip()
    if not method:
        raise MissingRequiredField("Falta el método de evaluación.")
    if method not in VALID_METHODS:
        raise MissingRequiredField("Método de evaluación inválido.", method=method)

    judge = Judge.objects.filter(pk=actor.judge_id).first()
    if judge is None:
        raise NotFound("Jurado no encontrado.")

    if judge.evaluation_method:
        if judge.evaluation_method != method:
            raise EvaluationMethodLocked(
                "El método de evaluación ya fue elegido y no se puede cambiar.",
                current=judge.evaluation_method,
            )
        return {"method": judge.evaluation_method, "changed": False}

    # Update condicionado: si otro request lo fijó primero, no lo pisamos
    updated = Judge.objects.filter(pk=judge.pk, evaluation_method__isnull=True).update(
        evaluation_method=method, evaluation_method_set_at=timezone.now()
    )
    if not updated:
        judge.refresh_from_db(fields=["evaluation_method"])
        if judge.evaluation_method != method:
            raise EvaluationMethodLocked(
                "El método de evaluación ya fue elegido y no se puede cambiar.",
                current=judge.evaluation_method,
            )
        return {"method": judge.evaluation_method, "changed": False}

    logger.info("Jurado %s eligió método '%s'", judge.code, method)
    return {"method": method, "changed": True}


@domain_operation
def judge_profile(actor: Optional[Actor]):
    actor = require_judge(actor)
    judge = Judge.objects.filter(pk=actor.judge_id).first()
    if judge is None:
        raise NotFound("Jurado no encontrado.")
    return {
        "judge": {
            "id": judge.pk,
            "code": judge.code,
            "fullName": judge.full_name,
            "evaluationMethod": judge.evaluation_method,
            "isAdmin": judge.is_admin,
        }
    }

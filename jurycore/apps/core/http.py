# jurycore/apps/core/http.py
from __future__ import annotations

import json
from functools import wraps
from typing import Any, Dict

from django.http import HttpRequest, JsonResponse

from .errors import JuryError, MissingRequiredField, PersistenceFailure
from .results import OperationResult


def _reject_constant(name: str):
    # NaN / Infinity no son JSON estándar
    raise ValueError(name)


def read_json(request: HttpRequest) -> Dict[str, Any]:
    """Cuerpo JSON como dict; si viene vacío o mal formado -> MissingRequiredField."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError):
        raise MissingRequiredField("Cuerpo JSON inválido.")
    if not isinstance(data, dict):
        raise MissingRequiredField("Se esperaba un objeto JSON.")
    return data


def error_response(error: JuryError) -> JsonResponse:
    return JsonResponse({"success": False, **error.as_dict()}, status=error.http_status)


def persistence_response(error: PersistenceFailure) -> JsonResponse:
    return JsonResponse(
        {"success": False, "error": error.code, "message": "Servicio no disponible."},
        status=error.http_status,
    )


def result_response(result: OperationResult, message: str = "", status: int = 200) -> JsonResponse:
    if not result.ok:
        return error_response(result.error)
    payload = {"success": True, **result.data}
    if message:
        payload["message"] = message
    return JsonResponse(payload, status=status)


def api_view(view_func):
    """
    Decorador para vistas JSON: traduce errores de dominio y de persistencia
    que escapan de la vista a respuestas JSON con su status.
    """
    @wraps(view_func)
    def _wrapped(request: HttpRequest, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except JuryError as exc:
            return error_response(exc)
        except PersistenceFailure as exc:
            return persistence_response(exc)
    return _wrapped

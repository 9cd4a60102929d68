# jurycore/apps/scoring/views.py
from __future__ import annotations

from django.contrib import messages
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods, require_POST

from jurycore.apps.accounts.decorators import admin_required
from jurycore.apps.core.errors import JuryError
from jurycore.apps.core.http import api_view, read_json, result_response
from jurycore.apps.selections.scopes import parse_scope

from .forms import ScoreForm
from .services.records import delete_score, record_score, scores_overview
from .services.weights import CRITERIA, SCORE_FIELDS


def _scope_or_404(scope_key: str):
    try:
        return parse_scope(scope_key)
    except JuryError:
        raise Http404("Ámbito inválido.")


@admin_required
@require_http_methods(["GET", "POST"])
def admin_scores(request: HttpRequest, scope: str) -> HttpResponse:
    """Panel de puntajes: el admin carga o borra puntajes de cualquier jurado."""
    scope_obj = _scope_or_404(scope)

    if request.method == "POST":
        action = request.POST.get("action", "save")
        if action == "delete":
            result = delete_score(request.actor, request.POST.get("score_id"))
            if result.ok:
                messages.success(request, "Puntaje eliminado.")
            else:
                messages.warning(request, result.error.message)
            return redirect("jury_admin_scores", scope=scope_obj.key)

        form = ScoreForm(request.POST)
        if form.is_valid():
            result = record_score(
                request.actor,
                form.cleaned_data["judge"].pk,
                form.cleaned_data["submission"].pk,
                scope_obj,
                form.raw_scores,
                form.cleaned_data.get("comments", ""),
            )
            if result.ok:
                total = result["score"]["weightedTotal"]
                messages.success(request, f"Puntaje guardado (total {total}).")
                return redirect("jury_admin_scores", scope=scope_obj.key)
            messages.error(request, result.error.message)
        else:
            messages.error(request, "Revisa los puntajes: cada criterio va de 1 a 10.")

    overview = scores_overview(request.actor, scope_obj)
    return render(request, "scoring/admin_scores.html", {
        "scope": scope_obj,
        "overview": overview.data,
        "criteria": CRITERIA,
    })


# -------------------------------
# API JSON
# -------------------------------
@require_http_methods(["GET"])
@api_view
def api_scores(request: HttpRequest, scope: str) -> JsonResponse:
    return result_response(scores_overview(request.actor, scope))


@require_POST
@api_view
def api_score_create(request: HttpRequest) -> JsonResponse:
    """
    {"judgeId", "submissionId", "scope", "scores": {"score1".."score4"}, "comments"}
    Los puntajes también se aceptan sueltos (score1..score4 en la raíz).
    """
    data = read_json(request)
    raw = data.get("scores")
    if raw is None and any(f in data for f in SCORE_FIELDS):
        raw = {f: data.get(f) for f in SCORE_FIELDS}
    result = record_score(
        request.actor,
        data.get("judgeId"),
        data.get("submissionId"),
        data.get("scope"),
        raw,
        data.get("comments") or data.get("comment") or "",
    )
    status = 201 if result.ok and result["created"] else 200
    return result_response(result, message="Puntaje guardado.", status=status)


@require_http_methods(["DELETE"])
@api_view
def api_score_delete(request: HttpRequest, score_id: int) -> JsonResponse:
    return result_response(delete_score(request.actor, score_id), message="Puntaje eliminado.")

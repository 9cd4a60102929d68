# jurycore/apps/judging/views.py
from __future__ import annotations

from django import forms
from django.contrib import messages
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods, require_POST

from jurycore.apps.accounts.decorators import method_required
from jurycore.apps.accounts.models import METHOD_SCORING
from jurycore.apps.core.http import api_view, read_json, result_response
from jurycore.apps.scoring.services.weights import CRITERIA

from .forms import EvaluationForm, FinalizeForm
from .services import (
    finalize_evaluations,
    list_submissions_for_judge,
    save_evaluation,
    selected_submissions,
)


@method_required
@require_http_methods(["GET", "POST"])
def judge_submissions(request: HttpRequest) -> HttpResponse:
    """Listado de postulaciones para el jurado, con su evaluación inline."""
    actor = request.actor
    category_id = request.GET.get("category") or None

    if request.method == "POST":
        if request.POST.get("action") == "remove":
            result = save_evaluation(actor, request.POST.get("submission_id"), remove=True)
            if result.ok:
                messages.success(request, "Evaluación eliminada.")
            else:
                messages.error(request, result.error.message)
            return redirect(request.get_full_path())

        form = EvaluationForm(request.POST, method=actor.evaluation_method)
        if form.is_valid():
            result = save_evaluation(
                actor,
                form.cleaned_data["submission_id"],
                selected=form.cleaned_data.get("selected", False),
                scores=form.scores,
                comments=form.cleaned_data.get("comments", ""),
            )
            if result.ok:
                messages.success(request, "Evaluación guardada.")
            else:
                messages.error(request, result.error.message)
        else:
            messages.error(request, "Revisa la evaluación: cada criterio va de 1 a 10.")
        return redirect(request.get_full_path())

    listing = list_submissions_for_judge(actor, category_id)
    for sub in listing["submissions"]:
        scores = (sub["evaluation"] or {}).get("scores") or {}
        sub["criteria_values"] = [
            {"field": field, "name": name, "weight": weight, "value": scores.get(field, "")}
            for field, name, weight in CRITERIA
        ]
    return render(request, "judging/submissions.html", {
        "listing": listing.data,
        "category_id": category_id,
        "is_scoring": actor.evaluation_method == METHOD_SCORING,
    })


@method_required
@require_http_methods(["GET", "POST"])
def review_selections(request: HttpRequest) -> HttpResponse:
    """Revisión de lo seleccionado y cierre (finalización) de hasta N postulaciones."""
    actor = request.actor
    selected = selected_submissions(actor)
    choices = [(s["id"], s["title"]) for s in selected["submissions"]]

    if request.method == "POST":
        form = FinalizeForm(request.POST, choices=choices)
        if form.is_valid():
            result = finalize_evaluations(actor, form.cleaned_data["submission_ids"])
            if result.ok:
                messages.success(request, f"{result['finalized']} evaluaciones finalizadas.")
            else:
                messages.error(request, result.error.message)
        else:
            messages.error(request, "Seleccione al menos una postulación.")
        return redirect("review_selections")

    return render(request, "judging/review_selections.html", {
        "selected": selected.data,
        "form": FinalizeForm(choices=choices),
    })


# -------------------------------
# API JSON
# -------------------------------
def _flag(value) -> bool:
    # "false" / "0" / "" -> False, igual que un checkbox de formulario
    return forms.BooleanField(required=False).to_python(value)


@require_http_methods(["GET", "POST"])
@api_view
def api_submissions(request: HttpRequest) -> JsonResponse:
    if request.method == "POST":
        data = read_json(request)
        scores = data.get("scores")
        if scores is None and any(f"score{i}" in data for i in range(1, 5)):
            scores = {f"score{i}": data.get(f"score{i}") for i in range(1, 5)}
        result = save_evaluation(
            request.actor,
            data.get("submissionId"),
            selected=_flag(data.get("selected")),
            scores=scores,
            comments=data.get("comments") or "",
            remove=_flag(data.get("remove")),
        )
        return result_response(result, message="Evaluación guardada.")
    return result_response(list_submissions_for_judge(request.actor, request.GET.get("categoryId")))


@require_http_methods(["GET"])
@api_view
def api_selected(request: HttpRequest) -> JsonResponse:
    return result_response(selected_submissions(request.actor))


@require_POST
@api_view
def api_finalize(request: HttpRequest) -> JsonResponse:
    data = read_json(request)
    result = finalize_evaluations(request.actor, data.get("submissionIds"))
    return result_response(result, message="Evaluaciones finalizadas.")

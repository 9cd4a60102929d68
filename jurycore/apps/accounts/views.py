# jurycore/apps/accounts/views.py
from __future__ import annotations

from django.contrib import messages
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods, require_POST

from jurycore.apps.core.errors import MissingRequiredField, Unauthorized
from jurycore.apps.core.http import api_view, read_json, result_response
from jurycore.apps.selections.scopes import TOP_SCOPE_KEY

from .context import require_judge
from .decorators import judge_required
from .forms import EvaluationMethodForm, PinLoginForm
from .services import (
    authenticate_pin,
    choose_evaluation_method,
    judge_profile,
    login_judge,
    logout_judge,
)


def _landing_for(request: HttpRequest):
    actor = request.actor
    if actor is None:
        return redirect("login")
    if actor.is_admin:
        return redirect("jury_admin_selections", scope=TOP_SCOPE_KEY)
    if not actor.evaluation_method:
        return redirect("evaluation_method")
    return redirect("judge_submissions")


def home(request: HttpRequest) -> HttpResponse:
    return _landing_for(request)


@require_http_methods(["GET", "POST"])
def login_view(request: HttpRequest) -> HttpResponse:
    next_url = request.GET.get("next") or request.POST.get("next") or ""
    if request.actor is not None and request.method == "GET":
        return _landing_for(request)

    if request.method == "POST":
        form = PinLoginForm(request.POST)
        if form.is_valid():
            judge = authenticate_pin(form.cleaned_data["pin"])
            if judge is not None:
                login_judge(request, judge)
                # Seguridad del redirect
                if next_url and url_has_allowed_host_and_scheme(
                    next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
                ):
                    return redirect(next_url)
                return _landing_for(request)
            form.add_error("pin", "PIN inválido.")
    else:
        form = PinLoginForm()

    return render(request, "accounts/login.html", {"form": form, "next": next_url})


@require_POST
def logout_view(request: HttpRequest) -> HttpResponse:
    logout_judge(request)
    return redirect("login")


@judge_required
@require_http_methods(["GET", "POST"])
def evaluation_method(request: HttpRequest) -> HttpResponse:
    current = request.actor.evaluation_method
    if request.method == "POST":
        form = EvaluationMethodForm(request.POST)
        if form.is_valid():
            result = choose_evaluation_method(request.actor, form.cleaned_data["method"])
            if result.ok:
                messages.success(request, "Método de evaluación guardado.")
                return redirect("judge_submissions")
            messages.error(request, result.error.message)
    else:
        form = EvaluationMethodForm(initial={"method": current} if current else None)

    return render(request, "accounts/evaluation_method.html", {"form": form, "current_method": current})


# -------------------------------
# API JSON
# -------------------------------
@require_POST
@api_view
def api_auth(request: HttpRequest) -> JsonResponse:
    """
    Acciones:
      - {"action": "login", "pin": "123456"}
      - {"action": "setEvaluationMethod", "method": "checkbox"|"scoring"}
    """
    data = read_json(request)
    action = data.get("action") or ("login" if "pin" in data else "")

    if action == "login":
        pin = str(data.get("pin") or "").strip()
        if not pin:
            raise MissingRequiredField("Falta el PIN.")
        judge = authenticate_pin(pin)
        if judge is None:
            raise Unauthorized("PIN inválido.")
        login_judge(request, judge)
        return JsonResponse({
            "success": True,
            "message": "Ingreso correcto.",
            "judge": {"id": judge.pk, "name": judge.full_name, "isAdmin": judge.is_admin},
        })

    if action == "setEvaluationMethod":
        result = choose_evaluation_method(request.actor, data.get("method"))
        return result_response(result, message="Método de evaluación guardado.")

    raise MissingRequiredField("Acción inválida.")


@require_POST
@api_view
def api_logout(request: HttpRequest) -> JsonResponse:
    logout_judge(request)
    return JsonResponse({"success": True, "message": "Sesión cerrada."})


@require_http_methods(["GET", "POST"])
@api_view
def api_method(request: HttpRequest) -> JsonResponse:
    actor = require_judge(request.actor)
    if request.method == "POST":
        data = read_json(request)
        result = choose_evaluation_method(actor, data.get("method"))
        return result_response(result, message="Método de evaluación guardado.")
    return JsonResponse({"success": True, "method": actor.evaluation_method})


@require_http_methods(["GET"])
@api_view
def api_profile(request: HttpRequest) -> JsonResponse:
    return result_response(judge_profile(request.actor))

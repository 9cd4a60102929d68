# jurycore/apps/selections/views.py
from __future__ import annotations

from django.contrib import messages
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods, require_POST

from jurycore.apps.accounts.decorators import admin_required
from jurycore.apps.core.errors import JuryError
from jurycore.apps.core.http import api_view, read_json, result_response
from jurycore.apps.registration.models import Category

from .scopes import general_scope, parse_scope, top_scope
from .services.lifecycle import candidates_for_scope, finalize_scope, select_for_scope
from .services.working_set import SelectionWorkingSet


def _scope_or_404(scope_key: str):
    try:
        return parse_scope(scope_key)
    except JuryError:
        raise Http404("Ámbito inválido.")


@admin_required
@require_http_methods(["GET", "POST"])
def manage_selections(request: HttpRequest, scope: str) -> HttpResponse:
    """
    Curaduría de un ámbito. Los cambios (agregar/subir/bajar/quitar) viven en
    la sesión hasta "Guardar", que reemplaza el conjunto completo en BD.
    """
    scope_obj = _scope_or_404(scope)
    category_id = request.GET.get("category") or None

    listing = candidates_for_scope(request.actor, scope_obj, category_id)
    if not listing.ok:
        raise Http404(listing.error.message)
    persisted_ids = [s["submissionId"] for s in listing["selections"]]
    ws = SelectionWorkingSet.load(request.session, scope_obj, persisted_ids)

    if request.method == "POST":
        action = request.POST.get("action", "")
        sid = request.POST.get("submission_id")
        try:
            if action == "add":
                ws.add(sid)
            elif action in ("up", "down"):
                ws.reorder(sid, action)
            elif action == "remove":
                ws.deselect(sid)
            elif action == "reset":
                ws.discard(request.session)
                return redirect(request.get_full_path())
            elif action == "save":
                result = select_for_scope(request.actor, scope_obj, ws.ordered_ids())
                if result.ok:
                    ws.discard(request.session)
                    messages.success(request, f"Selección guardada ({result['count']}).")
                    return redirect(request.get_full_path())
                messages.error(request, result.error.message)
            elif action == "finalize":
                result = finalize_scope(request.actor, scope_obj)
                if result.ok:
                    messages.success(request, "Ámbito finalizado.")
                else:
                    messages.error(request, result.error.message)
                return redirect(request.get_full_path())
            else:
                messages.error(request, "Acción inválida.")
        except JuryError as exc:
            messages.error(request, exc.message)
        else:
            ws.save(request.session)
        return redirect(request.get_full_path())

    by_id = {s["id"]: s for s in listing["submissions"]}
    working = [
        {"rank": e["rank"], "submission": by_id.get(e["submissionId"], {"id": e["submissionId"], "title": "(no disponible)"})}
        for e in ws.entries
    ]
    dirty = ws.ordered_ids() != persisted_ids or [e["rank"] for e in ws.entries] != list(range(1, len(ws) + 1))

    scopes = [top_scope()] + [general_scope(c.pk) for c in Category.objects.filter(is_active=True)]
    return render(request, "selections/manage.html", {
        "scope": scope_obj,
        "listing": listing.data,
        "working": working,
        "working_ids": set(ws.ordered_ids()),
        "dirty": dirty,
        "scopes": scopes,
        "categories": Category.objects.filter(is_active=True),
        "category_id": category_id,
    })


# -------------------------------
# API JSON
# -------------------------------
@require_http_methods(["GET", "POST"])
@api_view
def api_selections(request: HttpRequest, scope: str) -> JsonResponse:
    if request.method == "POST":
        data = read_json(request)
        result = select_for_scope(request.actor, scope, data.get("submissionIds"))
        return result_response(result, message="Selección guardada.")
    return result_response(candidates_for_scope(request.actor, scope, request.GET.get("categoryId")))


@require_POST
@api_view
def api_finalize_scope(request: HttpRequest, scope: str) -> JsonResponse:
    return result_response(finalize_scope(request.actor, scope), message="Ámbito finalizado.")

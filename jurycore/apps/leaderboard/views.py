# jurycore/apps/leaderboard/views.py
from __future__ import annotations

from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.views.decorators.http import require_http_methods

from jurycore.apps.accounts.decorators import admin_required
from jurycore.apps.core.http import api_view, result_response
from jurycore.apps.registration.models import Category
from jurycore.apps.selections.scopes import general_scope, top_scope

from .services.ranking import results_for_scope

MEDALS = {"gold": "🥇", "silver": "🥈", "bronze": "🥉"}


@admin_required
@require_http_methods(["GET"])
def results_page(request: HttpRequest, scope: str) -> HttpResponse:
    """
    Tabla de resultados del ámbito:
      • columnas por jurado (total ponderado de cada uno, "—" si no evaluó)
      • promedio a 2 decimales; sin puntajes al final
      • medallas por posición (1º/2º/3º)
    """
    result = results_for_scope(request.actor, scope)
    if not result.ok:
        raise Http404(result.error.message)

    rows = []
    for entry in result["results"]:
        rows.append({
            **entry,
            "medal": MEDALS.get(entry["tier"], ""),
            "display_position": entry["position"] + 1,
        })

    scopes = [top_scope()] + [general_scope(c.pk) for c in Category.objects.filter(is_active=True)]
    return render(request, "leaderboard/results.html", {
        "data": result.data,
        "rows": rows,
        "scopes": scopes,
    })


@require_http_methods(["GET"])
@api_view
def api_results(request: HttpRequest, scope: str) -> JsonResponse:
    return result_response(results_for_scope(request.actor, scope))

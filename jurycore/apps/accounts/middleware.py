# jurycore/apps/accounts/middleware.py
from __future__ import annotations

from .context import Actor
from .services import load_session_judge


class JudgeSessionMiddleware:
    """
    Adjunta request.judge y request.actor a partir de la sesión firmada.
    Las vistas pasan request.actor de forma explícita a las operaciones del núcleo.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        judge = load_session_judge(request)
        request.judge = judge
        request.actor = Actor.from_judge(judge) if judge else None
        return self.get_response(request)

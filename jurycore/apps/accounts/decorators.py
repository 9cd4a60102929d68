# jurycore/apps/accounts/decorators.py
from __future__ import annotations

import functools

from django.http import HttpRequest, HttpResponseForbidden
from django.shortcuts import redirect
from django.urls import reverse
from django.utils.http import urlencode


def _redirect_to_login(request: HttpRequest):
    url = reverse("login")
    return redirect(f"{url}?{urlencode({'next': request.get_full_path()})}")


def judge_required(view_func):
    """Páginas de jurado: sin sesión -> login con ?next=."""
    @functools.wraps(view_func)
    def _wrapped(request: HttpRequest, *args, **kwargs):
        if getattr(request, "actor", None) is None:
            return _redirect_to_login(request)
        return view_func(request, *args, **kwargs)
    return _wrapped


def method_required(view_func):
    """Páginas de evaluación: el jurado debe haber elegido su método antes."""
    @functools.wraps(view_func)
    @judge_required
    def _wrapped(request: HttpRequest, *args, **kwargs):
        if not request.actor.evaluation_method:
            return redirect("evaluation_method")
        return view_func(request, *args, **kwargs)
    return _wrapped


def admin_required(view_func):
    """Páginas de administración: sin sesión -> login; jurado común -> 403."""
    @functools.wraps(view_func)
    def _wrapped(request: HttpRequest, *args, **kwargs):
        actor = getattr(request, "actor", None)
        if actor is None:
            return _redirect_to_login(request)
        if not actor.is_admin:
            return HttpResponseForbidden("Solo administradores.")
        return view_func(request, *args, **kwargs)
    return _wrapped

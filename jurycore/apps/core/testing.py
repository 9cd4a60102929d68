# jurycore/apps/core/testing.py
from __future__ import annotations

from typing import Optional

from django.conf import settings

from jurycore.apps.accounts.models import Judge
from jurycore.apps.accounts.services import SESSION_JUDGE_KEY
from jurycore.apps.registration.models import Submission

# Hasher rápido para tests que crean jurados con PIN
FAST_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

ADMIN_CODE = "00832"


def make_judge(code: str, full_name: str, pin: str = "1234", method: Optional[str] = None, is_active: bool = True) -> Judge:
    judge = Judge(code=code, full_name=full_name, evaluation_method=method, is_active=is_active)
    judge.set_pin(pin)
    judge.save()
    return judge


def make_submission(category, number: str, title: Optional[str] = None, **extra) -> Submission:
    return Submission.objects.create(
        category=category,
        submission_number=number,
        title=title or f"Postulación {number}",
        **extra,
    )


def login_as(client, judge: Judge) -> None:
    """Sesión firmada con el jurado, sin pasar por el PIN."""
    session = client.session
    session[SESSION_JUDGE_KEY] = judge.pk
    session.save()
    client.cookies[settings.SESSION_COOKIE_NAME] = session.session_key

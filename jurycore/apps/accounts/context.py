# jurycore/apps/accounts/context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from jurycore.apps.core.errors import Unauthorized


@dataclass(frozen=True)
class Actor:
    """
    Identidad explícita de quien llama a una operación del núcleo.
    Se construye por request (middleware) y se pasa como parámetro.
    """
    judge_id: int
    name: str
    is_admin: bool = False
    evaluation_method: Optional[str] = None

    @classmethod
    def from_judge(cls, judge) -> "Actor":
        return cls(
            judge_id=judge.pk,
            name=judge.full_name,
            is_admin=judge.is_admin,
            evaluation_method=judge.evaluation_method,
        )


def require_judge(actor: Optional[Actor]) -> Actor:
    """Punto de control: cualquier jurado autenticado."""
    if actor is None:
        raise Unauthorized("Debe iniciar sesión como jurado.")
    return actor


def require_admin(actor: Optional[Actor]) -> Actor:
    """Punto de control: solo administradores (selecciones, finalización, puntajes ajenos)."""
    actor = require_judge(actor)
    if not actor.is_admin:
        raise Unauthorized("Se requiere acceso de administrador.")
    return actor

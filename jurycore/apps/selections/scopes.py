# jurycore/apps/selections/scopes.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from jurycore.apps.core.errors import InvalidScope, NotFound
from jurycore.apps.registration.models import Category

TOP_SCOPE_KEY = "top5"
GENERAL_PREFIX = "general:"

KIND_TOP = "top"
KIND_GENERAL = "general"


@dataclass(frozen=True)
class Scope:
    """
    Ámbito de selección/puntaje:
      - "top5"            -> Top global (máximo JURY_TOP_SCOPE_LIMIT)
      - "general:<id>"    -> selección general de una categoría (sin máximo)
    """
    key: str
    kind: str
    category_id: Optional[int] = None

    @property
    def is_top(self) -> bool:
        return self.kind == KIND_TOP

    @property
    def max_size(self) -> Optional[int]:
        if self.is_top:
            return int(getattr(settings, "JURY_TOP_SCOPE_LIMIT", 5))
        return None

    @property
    def label(self) -> str:
        if self.is_top:
            return f"Top {self.max_size}"
        name = Category.objects.filter(pk=self.category_id).values_list("name", flat=True).first()
        return f"Categorías generales · {name or self.category_id}"

    def __str__(self) -> str:
        return self.key


def top_scope() -> Scope:
    return Scope(key=TOP_SCOPE_KEY, kind=KIND_TOP)


def general_scope(category_id: int) -> Scope:
    return Scope(key=f"{GENERAL_PREFIX}{int(category_id)}", kind=KIND_GENERAL, category_id=int(category_id))


def parse_scope(value, check_category: bool = True) -> Scope:
    """
    Convierte la clave en Scope. Clave vacía o desconocida -> InvalidScope;
    categoría inexistente -> NotFound.
    """
    if isinstance(value, Scope):
        return value
    key = str(value or "").strip()
    if not key:
        raise InvalidScope("Falta el ámbito (scope).")
    if key == TOP_SCOPE_KEY:
        return top_scope()
    if key.startswith(GENERAL_PREFIX):
        raw_id = key[len(GENERAL_PREFIX):]
        if not raw_id.isdigit():
            raise InvalidScope("Ámbito inválido.", scope=key)
        scope = general_scope(int(raw_id))
        if check_category:
            if not Category.objects.filter(pk=scope.category_id).exists():
                raise NotFound("Categoría no encontrada.", scope=key)
        return scope
    raise InvalidScope("Ámbito inválido.", scope=key)

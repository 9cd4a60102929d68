# jurycore/apps/selections/services/working_set.py
from __future__ import annotations

from typing import Dict, List, Optional

from jurycore.apps.core.errors import MissingRequiredField, NotFound, SelectionLimitExceeded

from ..scopes import Scope

SESSION_PREFIX = "selection_ws:"

UP = "up"
DOWN = "down"


class SelectionWorkingSet:
    """
    Selección en edición (pantalla del admin), en memoria y guardada en sesión.
    Quitar una entrada NO renumera las demás: la numeración 1..N se rehace
    solo al persistir con select_for_scope.
    """

    def __init__(self, scope_key: str, limit: Optional[int] = None, entries: Optional[List[Dict[str, int]]] = None):
        self.scope_key = scope_key
        self.limit = limit
        self.entries: List[Dict[str, int]] = sorted(
            ({"submissionId": int(e["submissionId"]), "rank": int(e["rank"])} for e in (entries or [])),
            key=lambda e: e["rank"],
        )

    # ---------- construcción ----------
    @classmethod
    def for_scope(cls, scope: Scope, submission_ids: List[int]) -> "SelectionWorkingSet":
        entries = [{"submissionId": sid, "rank": i + 1} for i, sid in enumerate(submission_ids)]
        return cls(scope.key, scope.max_size, entries)

    @classmethod
    def load(cls, session, scope: Scope, default_ids: List[int]) -> "SelectionWorkingSet":
        stored = session.get(cls.session_key(scope.key))
        if stored is None:
            return cls.for_scope(scope, default_ids)
        return cls(scope.key, scope.max_size, stored)

    @staticmethod
    def session_key(scope_key: str) -> str:
        return f"{SESSION_PREFIX}{scope_key}"

    def save(self, session) -> None:
        session[self.session_key(self.scope_key)] = [dict(e) for e in self.entries]

    def discard(self, session) -> None:
        session.pop(self.session_key(self.scope_key), None)

    # ---------- consultas ----------
    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, submission_id) -> bool:
        return self._index(submission_id) is not None

    def ordered_ids(self) -> List[int]:
        return [e["submissionId"] for e in self.entries]

    def rank_of(self, submission_id) -> Optional[int]:
        idx = self._index(submission_id)
        return None if idx is None else self.entries[idx]["rank"]

    def _index(self, submission_id) -> Optional[int]:
        try:
            sid = int(submission_id)
        except (TypeError, ValueError):
            return None
        for i, e in enumerate(self.entries):
            if e["submissionId"] == sid:
                return i
        return None

    def _require(self, submission_id) -> int:
        idx = self._index(submission_id)
        if idx is None:
            raise NotFound("La postulación no está en la selección.", submissionId=submission_id)
        return idx

    # ---------- mutaciones ----------
    def add(self, submission_id) -> bool:
        """Agrega al final. Devuelve False si ya estaba."""
        try:
            sid = int(submission_id)
        except (TypeError, ValueError):
            raise MissingRequiredField("ID de postulación inválido.", value=submission_id)
        if sid in self:
            return False
        if self.limit is not None and len(self.entries) >= self.limit:
            raise SelectionLimitExceeded(f"Máximo {self.limit} postulaciones.", limit=self.limit)
        next_rank = max((e["rank"] for e in self.entries), default=0) + 1
        self.entries.append({"submissionId": sid, "rank": next_rank})
        return True

    def reorder(self, submission_id, direction: str) -> bool:
        """Intercambia rank con el vecino. En los extremos no hace nada (False)."""
        if direction not in (UP, DOWN):
            raise MissingRequiredField("Dirección inválida (up/down).", direction=direction)
        idx = self._require(submission_id)
        other = idx - 1 if direction == UP else idx + 1
        if other < 0 or other >= len(self.entries):
            return False
        a, b = self.entries[idx], self.entries[other]
        a["rank"], b["rank"] = b["rank"], a["rank"]
        self.entries[idx], self.entries[other] = b, a
        return True

    def deselect(self, submission_id) -> None:
        del self.entries[self._require(submission_id)]

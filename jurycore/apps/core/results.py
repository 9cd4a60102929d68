# jurycore/apps/core/results.py
from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from django.db import DatabaseError

from .errors import JuryError, PersistenceFailure

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Resultado discriminado de una operación del núcleo: éxito con datos o error de dominio."""
    ok: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[JuryError] = None

    @classmethod
    def success(cls, data: Optional[Dict[str, Any]] = None) -> "OperationResult":
        return cls(ok=True, data=dict(data or {}))

    @classmethod
    def failure(cls, error: JuryError) -> "OperationResult":
        return cls(ok=False, error=error)

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error else None

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


def domain_operation(func: Callable[..., Optional[Dict[str, Any]]]) -> Callable[..., OperationResult]:
    """
    Frontera de una operación pública:
      - JuryError      -> OperationResult.failure
      - DatabaseError  -> PersistenceFailure (se propaga)
      - dict / None    -> OperationResult.success
    """
    @functools.wraps(func)
    def _wrapped(*args, **kwargs) -> OperationResult:
        try:
            data = func(*args, **kwargs)
        except JuryError as exc:
            return OperationResult.failure(exc)
        except DatabaseError as exc:
            logger.exception("Falla de persistencia en %s", func.__name__)
            raise PersistenceFailure(str(exc)) from exc
        return OperationResult.success(data)
    return _wrapped

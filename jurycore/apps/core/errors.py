# jurycore/apps/core/errors.py
from __future__ import annotations


class JuryError(Exception):
    """
    Error de dominio esperado (entrada rechazada).
    Cada subclase tiene un código estable y el status HTTP que le corresponde.
    """
    code = "JURY_ERROR"
    http_status = 400

    def __init__(self, message: str = "", **details):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__
        self.details = details

    def as_dict(self) -> dict:
        data = {"error": self.code, "message": self.message}
        if self.details:
            data["details"] = self.details
        return data


class InvalidScoreRange(JuryError):
    code = "INVALID_SCORE_RANGE"


class MissingRequiredField(JuryError):
    code = "MISSING_REQUIRED_FIELD"


class InvalidScope(MissingRequiredField):
    code = "INVALID_SCOPE"


class SelectionLimitExceeded(JuryError):
    code = "SELECTION_LIMIT_EXCEEDED"


class NotFound(JuryError):
    code = "NOT_FOUND"
    http_status = 404


class Unauthorized(JuryError):
    code = "UNAUTHORIZED"
    http_status = 401


class EvaluationMethodLocked(JuryError):
    code = "EVALUATION_METHOD_LOCKED"
    http_status = 409


class PersistenceFailure(Exception):
    """
    Falla de la base de datos (error o timeout). Es fatal: nunca se convierte
    en un error de dominio y siempre llega al llamador.
    """
    code = "PERSISTENCE_FAILURE"
    http_status = 503

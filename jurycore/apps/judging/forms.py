# jurycore/apps/judging/forms.py
from __future__ import annotations

from django import forms

from jurycore.apps.accounts.models import METHOD_SCORING
from jurycore.apps.scoring.services.weights import CRITERIA, MAX_SCORE, MIN_SCORE


class EvaluationForm(forms.Form):
    """
    Fila de evaluación de una postulación. Los campos de puntaje solo se
    exigen cuando el jurado eligió el método scoring.
    """
    submission_id = forms.IntegerField(widget=forms.HiddenInput())
    selected = forms.BooleanField(required=False, label="Seleccionar")
    comments = forms.CharField(
        required=False,
        label="Comentarios",
        widget=forms.Textarea(attrs={"rows": 2, "class": "rf-input", "placeholder": "Comentarios"}),
    )

    def __init__(self, *args, method: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.method = method
        if method == METHOD_SCORING:
            for field, name, weight in CRITERIA:
                self.fields[field] = forms.IntegerField(
                    min_value=MIN_SCORE,
                    max_value=MAX_SCORE,
                    label=f"{name} (x{weight})",
                    widget=forms.NumberInput(attrs={"min": MIN_SCORE, "max": MAX_SCORE, "step": 1, "class": "rf-input rf-input--sm"}),
                )

    @property
    def scores(self):
        if self.method != METHOD_SCORING:
            return None
        return {field: self.cleaned_data[field] for field, _, _ in CRITERIA}


class FinalizeForm(forms.Form):
    submission_ids = forms.TypedMultipleChoiceField(coerce=int, label="Postulaciones a finalizar")

    def __init__(self, *args, choices=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["submission_ids"].choices = list(choices)

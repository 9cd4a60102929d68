# jurycore/apps/scoring/forms.py
from __future__ import annotations

from django import forms

from jurycore.apps.accounts.models import Judge
from jurycore.apps.registration.models import Submission

from .services.weights import CRITERIA, MAX_SCORE, MIN_SCORE


class ScoreForm(forms.Form):
    """Carga de puntaje desde el panel de administración (por cualquier jurado)."""
    judge = forms.ModelChoiceField(
        queryset=Judge.objects.filter(is_active=True).order_by("full_name"),
        label="Jurado",
        widget=forms.Select(attrs={"class": "rf-select rf-select--sm"}),
    )
    submission = forms.ModelChoiceField(
        queryset=Submission.objects.eligible(),
        widget=forms.HiddenInput(),
    )
    comments = forms.CharField(
        required=False,
        label="Comentarios",
        widget=forms.Textarea(attrs={"rows": 2, "class": "rf-input", "placeholder": "Comentarios"}),
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Un campo por criterio, con su peso en la etiqueta
        for field, name, weight in CRITERIA:
            self.fields[field] = forms.IntegerField(
                min_value=MIN_SCORE,
                max_value=MAX_SCORE,
                label=f"{name} (x{weight})",
                widget=forms.NumberInput(attrs={"min": MIN_SCORE, "max": MAX_SCORE, "step": 1, "class": "rf-input rf-input--sm"}),
            )

    @property
    def raw_scores(self) -> list[int]:
        return [self.cleaned_data[field] for field, _, _ in CRITERIA]

# jurycore/apps/accounts/forms.py
from __future__ import annotations

from django import forms

from .models import EVALUATION_METHOD_CHOICES, Judge


class PinLoginForm(forms.Form):
    pin = forms.CharField(
        label="PIN",
        min_length=4,
        max_length=12,
        widget=forms.PasswordInput(attrs={"inputmode": "numeric", "autocomplete": "one-time-code"}),
    )

    def clean_pin(self):
        pin = (self.cleaned_data.get("pin") or "").strip()
        if not pin.isdigit():
            raise forms.ValidationError("El PIN solo contiene dígitos.")
        return pin


class EvaluationMethodForm(forms.Form):
    method = forms.ChoiceField(
        label="Método de evaluación",
        choices=EVALUATION_METHOD_CHOICES,
        widget=forms.RadioSelect,
    )


class JudgeAdminForm(forms.ModelForm):
    """Form del admin de Django: permite fijar/cambiar el PIN sin exponer el hash."""
    pin = forms.CharField(
        label="PIN",
        required=False,
        help_text="Dejar vacío para conservar el PIN actual.",
        widget=forms.PasswordInput(render_value=False),
    )

    class Meta:
        model = Judge
        fields = ["code", "full_name", "is_active", "evaluation_method"]

    def clean(self):
        cleaned = super().clean()
        pin = (cleaned.get("pin") or "").strip()
        if pin and not pin.isdigit():
            self.add_error("pin", "El PIN solo contiene dígitos.")
        if not pin and (self.instance is None or not self.instance.pin_hash):
            self.add_error("pin", "El jurado necesita un PIN.")
        return cleaned

    def save(self, commit=True):
        judge = super().save(commit=False)
        pin = (self.cleaned_data.get("pin") or "").strip()
        if pin:
            judge.set_pin(pin)
        if commit:
            judge.save()
        return judge

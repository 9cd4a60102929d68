from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from jurycore.apps.accounts.models import EVALUATION_METHOD_CHOICES, Judge


class Command(BaseCommand):
    help = "Crea (o actualiza) un jurado con su PIN. El código de admin se define en JURY_ADMIN_CODE."

    def add_arguments(self, parser):
        parser.add_argument("code", type=str, help="Código único del jurado (ej. 00832)")
        parser.add_argument("full_name", type=str, help="Nombre completo")
        parser.add_argument("pin", type=str, help="PIN numérico")
        parser.add_argument(
            "--method",
            choices=[value for value, _ in EVALUATION_METHOD_CHOICES],
            default=None,
            help="Método de evaluación inicial (opcional)",
        )
        parser.add_argument("--inactive", action="store_true", help="Crear el jurado desactivado")

    @transaction.atomic
    def handle(self, *args, **opts):
        code: str = opts["code"].strip()
        pin: str = opts["pin"].strip()
        if not code:
            raise CommandError("El código no puede estar vacío.")
        if not pin.isdigit():
            raise CommandError("El PIN solo puede contener dígitos.")
        # El login busca por PIN: no puede repetirse entre jurados
        for other in Judge.objects.exclude(code=code):
            if other.check_pin(pin):
                raise CommandError(f"El PIN ya está en uso por el jurado {other.code}.")

        judge, created = Judge.objects.get_or_create(code=code, defaults={"full_name": opts["full_name"]})
        judge.full_name = opts["full_name"]
        judge.is_active = not opts["inactive"]
        if opts["method"] and not judge.evaluation_method:
            judge.evaluation_method = opts["method"]
        judge.set_pin(pin)
        judge.save()

        verb = "creado" if created else "actualizado"
        role = "admin" if judge.is_admin else "jurado"
        self.stdout.write(self.style.SUCCESS(f"✓ Jurado {verb}: {judge.code} · {judge.full_name} ({role})"))

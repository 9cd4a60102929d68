from __future__ import annotations

import random

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from jurycore.apps.accounts.context import Actor
from jurycore.apps.accounts.models import METHOD_CHECKBOX, METHOD_SCORING, Judge
from jurycore.apps.registration.models import Category, Submission
from jurycore.apps.scoring.models import ScoreRecord
from jurycore.apps.scoring.services.records import record_score
from jurycore.apps.selections.models import ScopeFinalization, Selection
from jurycore.apps.selections.scopes import TOP_SCOPE_KEY, general_scope
from jurycore.apps.selections.services.lifecycle import select_for_scope

DEMO_CATEGORIES = ["Diseño Gráfico", "Diseño de Producto", "Diseño de Interiores"]
DEMO_TITLES = [
    "Identidad para feria local", "Lámpara plegable", "Café de barrio", "Afiche tipográfico",
    "Silla apilable", "Señalética hospitalaria", "Packaging compostable", "Mural interactivo",
]


def _ensure_judge(code: str, full_name: str, pin: str, method=None) -> Judge:
    judge, created = Judge.objects.get_or_create(code=code, defaults={"full_name": full_name})
    if created or not judge.pin_hash:
        judge.set_pin(pin)
        judge.evaluation_method = method
        judge.save()
    return judge


class Command(BaseCommand):
    help = "Crea datos DEMO del jurado: categorías, postulaciones, jurados (PIN 1111, 2222...), selecciones y puntajes."

    def add_arguments(self, parser):
        parser.add_argument("--per-category", type=int, default=6, help="Postulaciones por categoría")
        parser.add_argument("--judges", type=int, default=3, help="Cantidad de jurados (además del admin)")
        parser.add_argument("--admin-pin", type=str, default="008320", help="PIN del administrador")
        parser.add_argument("--seed-scores", action="store_true", help="Carga puntajes aleatorios en las selecciones")
        parser.add_argument("--reset", action="store_true", help="Borra selecciones y puntajes previos")

    @transaction.atomic
    def handle(self, *args, **opts):
        per_category: int = opts["per_category"]
        judges_count: int = opts["judges"]
        if per_category < 1:
            raise CommandError("--per-category debe ser >= 1")
        if not 1 <= judges_count <= 9:
            raise CommandError("--judges admite de 1 a 9 jurados demo (PIN 1111..9999)")

        if opts["reset"]:
            ScoreRecord.objects.all().delete()
            Selection.objects.all().delete()
            ScopeFinalization.objects.all().delete()
            self.stdout.write(self.style.WARNING("• Selecciones y puntajes previos eliminados"))

        # 1) Jurados
        admin = _ensure_judge(settings.JURY_ADMIN_CODE, "Administración del Jurado", opts["admin_pin"])
        judges = []
        for i in range(1, judges_count + 1):
            method = METHOD_SCORING if i % 2 else METHOD_CHECKBOX
            judges.append(_ensure_judge(f"J{i:02d}", f"Jurado Demo {i}", str(i) * 4, method))
        self.stdout.write(self.style.SUCCESS(f"✓ Jurados listos: admin + {len(judges)}"))

        # 2) Categorías y postulaciones
        categories = []
        for name in DEMO_CATEGORIES:
            cat, _ = Category.objects.get_or_create(name=name)
            categories.append(cat)

        created = 0
        for c_idx, cat in enumerate(categories, start=1):
            for n in range(1, per_category + 1):
                number = f"DC-{c_idx}{n:03d}"
                _, was_created = Submission.objects.get_or_create(
                    submission_number=number,
                    defaults={
                        "category": cat,
                        "title": f"{DEMO_TITLES[(c_idx + n) % len(DEMO_TITLES)]} #{n}",
                        "description": f"Postulación demo {number} en {cat.name}.",
                        "submission_type": "TEAM" if n % 3 == 0 else "INDIVIDUAL",
                        "files": [f"demo/{number.lower()}.pdf"],
                    },
                )
                created += int(was_created)
        self.stdout.write(self.style.SUCCESS(f"✓ Postulaciones creadas: {created}"))

        # 3) Selecciones (Top global + generales por categoría)
        actor = Actor.from_judge(admin)
        rng = random.Random(42)
        eligible = list(Submission.objects.eligible().values_list("pk", flat=True))
        top_ids = rng.sample(eligible, min(len(eligible), int(settings.JURY_TOP_SCOPE_LIMIT)))
        scopes = {TOP_SCOPE_KEY: top_ids}
        for cat in categories:
            ids = list(Submission.objects.eligible().filter(category=cat).values_list("pk", flat=True))
            scopes[general_scope(cat.pk).key] = ids[: max(1, len(ids) // 2)]

        for key, ids in scopes.items():
            result = select_for_scope(actor, key, ids)
            if not result.ok:
                raise CommandError(f"No se pudo seleccionar {key}: {result.error.message}")
        self.stdout.write(self.style.SUCCESS(f"✓ Selecciones en {len(scopes)} ámbitos"))

        # 4) Puntajes (si aplica)
        if opts["seed_scores"]:
            count = 0
            for key, ids in scopes.items():
                for sid in ids:
                    for judge in judges:
                        scores = [rng.randint(4, 10) for _ in range(4)]
                        result = record_score(actor, judge.pk, sid, key, scores, "Demo")
                        if not result.ok:
                            raise CommandError(f"Puntaje inválido: {result.error.message}")
                        count += 1
            self.stdout.write(self.style.SUCCESS(f"✓ Puntajes cargados: {count}"))

        self.stdout.write(self.style.SUCCESS(f"Listo. Admin: código {admin.code}, PIN {opts['admin_pin']}"))

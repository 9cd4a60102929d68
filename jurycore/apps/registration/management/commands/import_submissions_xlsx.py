from __future__ import annotations

import csv
import unicodedata
from datetime import datetime
from pathlib import Path

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, transaction

from openpyxl import load_workbook

from jurycore.apps.registration.models import (
    STATUS_CHOICES,
    STATUS_SUBMITTED,
    TYPE_CHOICES,
    Category,
    Submission,
)


def _strip_accents_lower(s: str) -> str:
    s = unicodedata.normalize("NFKD", (s or "").strip().lower())
    return "".join(c for c in s if not unicodedata.combining(c))


TYPE_ALIASES = {
    "individual": "INDIVIDUAL",
    "team": "TEAM",
    "equipo": "TEAM",
    "grupal": "TEAM",
}

STATUS_VALUES = {value for value, _ in STATUS_CHOICES}
TYPE_VALUES = {value for value, _ in TYPE_CHOICES}


def _normalize_type(raw: str) -> str:
    if not raw:
        return "INDIVIDUAL"
    value = TYPE_ALIASES.get(_strip_accents_lower(raw), raw.strip().upper())
    if value not in TYPE_VALUES:
        raise CommandError(f"submission_type inválido: '{raw}'.")
    return value


def _normalize_status(raw: str) -> str:
    if not raw:
        return STATUS_SUBMITTED
    value = raw.strip().upper()
    if value not in STATUS_VALUES:
        raise CommandError(f"status inválido: '{raw}'.")
    return value


def _split_files(raw: str) -> list[str]:
    # "a.pdf; b.png" -> ["a.pdf", "b.png"]
    return [p.strip() for p in (raw or "").replace(",", ";").split(";") if p.strip()]


def _get_category(name: str, create: bool) -> Category:
    if not name:
        raise CommandError("category_name vacío.")
    for cat in Category.objects.all():
        if _strip_accents_lower(cat.name) == _strip_accents_lower(name):
            return cat
    if not create:
        raise CommandError(f"Categoría '{name}' no existe (usa --create-categories).")
    return Category.objects.create(name=name.strip())


COLUMNS = [
    "category_name",
    "submission_number",
    "title",
    "description",
    "submission_type",
    "status",
    "files",
]


class Command(BaseCommand):
    help = "Importa postulaciones desde un .xlsx (una fila por postulación); actualiza por submission_number."

    def add_arguments(self, parser):
        parser.add_argument("xlsx_path", type=str, help="Ruta al archivo .xlsx con las postulaciones")
        parser.add_argument("--sheet", type=str, default=None, help="Nombre de la hoja (por defecto: primera)")
        parser.add_argument("--create-categories", action="store_true", help="Crea categorías inexistentes")
        parser.add_argument("--report", type=str, default=None, help="Ruta del reporte CSV (por defecto: cwd)")
        parser.add_argument("--dry-run", action="store_true", help="Simula sin escribir cambios")

    def handle(self, *args, **options):
        xlsx_path = Path(options["xlsx_path"])
        sheet_name = options.get("sheet")
        create_categories = options.get("create_categories", False)
        dry_run = options.get("dry_run", False)

        if not xlsx_path.exists():
            raise CommandError(f"Archivo no encontrado: {xlsx_path}")

        wb = load_workbook(filename=str(xlsx_path), data_only=True)
        ws = wb[sheet_name] if sheet_name else wb.worksheets[0]

        # Validar cabecera
        header_cells = [c.value for c in next(ws.iter_rows(min_row=1, max_row=1))]
        headers = [str(h).strip() if h is not None else "" for h in header_cells]

        for i, col in enumerate(COLUMNS):
            if i >= len(headers) or headers[i] != col:
                raise CommandError(
                    f"Cabecera inválida en columna {i+1}. Esperado '{col}', encontrado '{headers[i] if i < len(headers) else ''}'.\n"
                    f"Cabecera completa: {headers}"
                )

        if options.get("report"):
            report_path = Path(options["report"])
        else:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            report_path = Path.cwd() / f"import_submissions_{timestamp}.csv"

        report_fp = None
        writer = None
        if not dry_run:
            report_fp = report_path.open("w", newline="", encoding="utf-8")
            writer = csv.writer(report_fp)
            writer.writerow(["row", "status", "submission_number", "action", "errors"])

        total = created_count = updated_count = errs = 0

        try:
            for idx, row in enumerate(ws.iter_rows(min_row=2), start=2):
                vals = [(str(c.value).strip() if c.value is not None else "") for c in row]
                if not any(vals):
                    continue
                total += 1
                data = dict(zip(headers, vals))

                status = "OK"
                action = ""
                error = ""
                try:
                    number = data["submission_number"]
                    title = data["title"]
                    if not number:
                        raise CommandError("submission_number vacío.")
                    if not title:
                        raise CommandError("title vacío.")
                    sub_type = _normalize_type(data.get("submission_type", ""))
                    sub_status = _normalize_status(data.get("status", ""))
                    files = _split_files(data.get("files", ""))

                    if dry_run:
                        if not create_categories:
                            _get_category(data["category_name"], create=False)
                        exists = Submission.objects.filter(submission_number=number).exists()
                        action = "update" if exists else "create"
                    else:
                        with transaction.atomic():
                            category = _get_category(data["category_name"], create=create_categories)
                            _, created = Submission.objects.update_or_create(
                                submission_number=number,
                                defaults={
                                    "category": category,
                                    "title": title,
                                    "description": data.get("description", ""),
                                    "submission_type": sub_type,
                                    "status": sub_status,
                                    "files": files,
                                },
                            )
                        action = "create" if created else "update"
                except (CommandError, ValidationError, DatabaseError) as e:
                    status = "ERROR"
                    error = str(e)
                    errs += 1
                else:
                    if action == "create":
                        created_count += 1
                    else:
                        updated_count += 1

                if writer:
                    writer.writerow([idx, status, data.get("submission_number", ""), action, error])
        finally:
            if report_fp:
                report_fp.close()

        self.stdout.write(self.style.SUCCESS(f"Filas procesadas: {total}"))
        self.stdout.write(self.style.SUCCESS(
            f"CREADAS: {created_count}  ·  ACTUALIZADAS: {updated_count}  ·  ERRORES: {errs}"
        ))
        if not dry_run:
            self.stdout.write(self.style.SUCCESS(f"Reporte: {report_path}"))
        else:
            self.stdout.write(self.style.WARNING("Dry-run: no se escribió reporte ni se guardaron postulaciones."))

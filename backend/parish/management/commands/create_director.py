from __future__ import annotations

from django.core.management.base import BaseCommand
from django.db import transaction

from parish.domain.models import User, UserRole


class Command(BaseCommand):
    help = "Cria a conta inicial de Diretor. Idempotente (não altera uma conta existente)."

    def add_arguments(self, parser):
        parser.add_argument("--email", type=str, default="director@paroquia.com")
        parser.add_argument("--password", type=str, default="password")
        parser.add_argument("--name", type=str, default="Diretor Admin")
        parser.add_argument("--cpf", type=str, default="000.000.000-00")
        parser.add_argument("--rg", type=str, default="00.000.000-0")
        parser.add_argument("--phone", type=str, default="(00) 00000-0000")

    def handle(self, *args, **opts):
        email = opts["email"].strip().lower()

        clash = User.objects.filter(email=email) | User.objects.filter(cpf=opts["cpf"]) | User.objects.filter(rg=opts["rg"])
        existing = clash.first()
        if existing is not None:
            self.stdout.write(self.style.WARNING(
                f"Director (or e-mail/CPF/RG) already exists: {existing.email} role={existing.role}."
            ))
            return

        with transaction.atomic():
            director = User.objects.create_director(
                email,
                opts["password"],
                name=opts["name"],
                cpf=opts["cpf"],
                rg=opts["rg"],
                phone=opts["phone"],
            )
        self.stdout.write(self.style.SUCCESS(
            f"Created {UserRole.DIRECTOR.label} {director.email} (id={director.id})."
        ))

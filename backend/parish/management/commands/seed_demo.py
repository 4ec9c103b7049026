from __future__ import annotations

from django.core.management.base import BaseCommand

from parish.domain.models import Ministry, MinistryMember, User, UserRole, UserStatus

DEFAULT_MINISTRIES = [
    ("Liturgia", "Leitores, salmistas e comentaristas das celebrações.", "#2563eb"),
    ("Música", "Coral e instrumentistas das missas dominicais.", "#db2777"),
    ("Acolhida", "Recepção dos fiéis na entrada da igreja.", "#16a34a"),
]

DEFAULT_NAMES = ["Ana", "Bruno", "Carla", "Daniel", "Elisa", "Felipe"]


class Command(BaseCommand):
    help = "Seed demo data (ministérios + coordenador + voluntários). Idempotente."

    def add_arguments(self, parser):
        parser.add_argument(
            "--names",
            type=str,
            help="Lista de nomes separada por vírgula. Ex.: 'Ana,Beto,Caio'. "
                 "Se omitido, usa uma lista padrão.",
        )
        parser.add_argument(
            "--password",
            type=str,
            default="password",
            help="Senha das contas demo (default: password).",
        )

    def handle(self, *args, **kwargs):
        names_arg = kwargs.get("names")
        password = kwargs["password"]

        ministries = []
        for name, description, color in DEFAULT_MINISTRIES:
            m, _ = Ministry.objects.get_or_create(
                name=name, defaults={"description": description, "color": color}
            )
            ministries.append(m)

        if names_arg:
            names = [n.strip() for n in names_arg.split(",") if n.strip()]
        else:
            names = DEFAULT_NAMES

        created_count = 0
        people = [("Coordenador Demo", UserRole.COORDINATOR)] + [(n, UserRole.VOLUNTEER) for n in names]
        for idx, (name, role) in enumerate(people, start=1):
            email = f"{name.lower().replace(' ', '.')}@demo.paroquia.com"
            cpf, rg = f"900.000.000-{idx:02d}", f"90.000.000-{idx:02d}"
            user = User.objects.filter(email=email).first()
            if user is None:
                if User.objects.filter(cpf=cpf).exists() or User.objects.filter(rg=rg).exists():
                    self.stdout.write(self.style.WARNING(f"Skipping {name}: CPF/RG {cpf} already in use."))
                    continue
                user = User.objects.create_user(
                    email,
                    password,
                    name=name,
                    role=role,
                    status=UserStatus.ACTIVE,
                    cpf=cpf,
                    rg=rg,
                )
                created_count += 1

            # coordenador em todos; voluntários em rodízio
            targets = ministries if role == UserRole.COORDINATOR else [ministries[idx % len(ministries)]]
            for m in targets:
                MinistryMember.objects.get_or_create(
                    user=user, ministry=m,
                    defaults={"is_coordinator": role == UserRole.COORDINATOR},
                )

        self.stdout.write(self.style.SUCCESS(
            f"Seed completed. users: created={created_count}, "
            f"ministries={Ministry.objects.count()}, total users={User.objects.count()}."
        ))

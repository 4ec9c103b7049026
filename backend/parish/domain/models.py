from __future__ import annotations

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

# =========================
# Choices canônicos
# =========================

class UserRole(models.TextChoices):
    VOLUNTEER = "VOLUNTEER", "Voluntário"
    COORDINATOR = "COORDINATOR", "Coordenador"
    DIRECTOR = "DIRECTOR", "Diretor"

class UserStatus(models.TextChoices):
    ACTIVE = "active", "Ativo"
    INACTIVE = "inactive", "Inativo"

class ParticipationStatus(models.TextChoices):
    PENDING = "PENDING", "Pendente"
    CONFIRMED = "CONFIRMED", "Confirmado"
    EXCHANGE_REQUESTED = "EXCHANGE_REQUESTED", "Troca solicitada"

# =========================
# Usuários
# =========================

class UserManager(BaseUserManager):
    """Manager de usuários identificados por e-mail."""

    use_in_migrations = True

    def create_user(self, email: str, password: str | None = None, **extra):
        if not email:
            raise ValueError("Email is required")
        user = self.model(email=email.strip().lower(), **extra)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_director(self, email: str, password: str, **extra):
        extra.setdefault("role", UserRole.DIRECTOR)
        extra.setdefault("status", UserStatus.ACTIVE)
        return self.create_user(email, password, **extra)


class User(AbstractBaseUser):
    """Membro da paróquia (voluntário, coordenador ou diretor)."""
    name = models.CharField(max_length=150, db_index=True)
    email = models.EmailField(unique=True)
    role = models.CharField(
        max_length=12, choices=UserRole.choices, default=UserRole.VOLUNTEER, db_index=True
    )
    status = models.CharField(
        max_length=8, choices=UserStatus.choices, default=UserStatus.ACTIVE, db_index=True
    )
    phone = models.CharField(max_length=30, blank=True, null=True)
    cpf = models.CharField(max_length=14, unique=True)
    rg = models.CharField(max_length=20, unique=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name", "cpf", "rg"]

    class Meta:
        verbose_name = "Usuário"
        verbose_name_plural = "Usuários"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["role", "status"], name="user_role_status_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE


class Address(models.Model):
    """Endereço (1:1) de um usuário."""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="address")
    street = models.CharField(max_length=200)
    number = models.CharField(max_length=20, blank=True, null=True)
    complement = models.CharField(max_length=100, blank=True, null=True)
    neighborhood = models.CharField(max_length=100, blank=True, null=True)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=50)
    zip_code = models.CharField(max_length=12)

    class Meta:
        verbose_name = "Endereço"
        verbose_name_plural = "Endereços"

    def __str__(self):
        return f"{self.street}, {self.number or 's/n'} - {self.city}/{self.state}"

# =========================
# Ministérios
# =========================

class Ministry(models.Model):
    """Ministério (pastoral) ao qual os voluntários pertencem."""
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField()
    color = models.CharField(max_length=20, blank=True, default="")
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = "Ministério"
        verbose_name_plural = "Ministérios"
        ordering = ["created_at"]

    def __str__(self):
        return self.name


class MinistryMember(models.Model):
    """Vínculo N:N entre usuário e ministério."""
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="ministries")
    ministry = models.ForeignKey(Ministry, on_delete=models.PROTECT, related_name="members")
    is_coordinator = models.BooleanField(default=False)

    class Meta:
        verbose_name = "Membro de ministério"
        verbose_name_plural = "Membros de ministério"
        constraints = [
            models.UniqueConstraint(fields=("user", "ministry"), name="uniq_ministry_member"),
        ]

    def __str__(self):
        return f"{self.user} @ {self.ministry}"

# =========================
# Escalas
# =========================

class Schedule(models.Model):
    """Escala de um ministério em uma data e hora (ex.: Missa)."""
    type = models.CharField(max_length=100, db_index=True)
    date = models.DateField(db_index=True)
    time = models.TimeField()
    notes = models.TextField(blank=True, null=True)
    ministry = models.ForeignKey(Ministry, on_delete=models.PROTECT, related_name="schedules")
    created_by = models.ForeignKey(User, on_delete=models.PROTECT, related_name="created_schedules")
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = "Escala"
        verbose_name_plural = "Escalas"
        ordering = ["-date", "-time"]
        indexes = [
            models.Index(fields=["ministry", "date"], name="schedule_ministry_date_idx"),
        ]

    def __str__(self):
        return f"{self.date} {self.time:%H:%M} {self.type}"


class ScheduleVolunteer(models.Model):
    """Participação de um voluntário em uma escala."""
    schedule = models.ForeignKey(Schedule, on_delete=models.CASCADE, related_name="volunteers")
    volunteer = models.ForeignKey(User, on_delete=models.PROTECT, related_name="participations")
    status = models.CharField(
        max_length=20,
        choices=ParticipationStatus.choices,
        default=ParticipationStatus.PENDING,
        db_index=True,
    )
    change_reason = models.TextField(blank=True, null=True)
    confirmed_at = models.DateTimeField(blank=True, null=True, db_index=True)

    class Meta:
        verbose_name = "Participação"
        verbose_name_plural = "Participações"
        constraints = [
            models.UniqueConstraint(fields=("schedule", "volunteer"), name="uniq_schedule_volunteer"),
        ]
        indexes = [
            models.Index(fields=["volunteer", "status"], name="participation_vol_status_idx"),
            models.Index(fields=["status", "confirmed_at"], name="participation_status_conf_idx"),
        ]

    def __str__(self):
        return f"{self.schedule} -> {self.volunteer} ({self.status})"

# =========================
# Auditoria
# =========================

class AuditLog(models.Model):
    """Registra ações de criação, atualização e exclusão em outros modelos."""
    action = models.CharField(max_length=50, db_index=True)
    table = models.CharField(max_length=50, db_index=True)
    record_id = models.CharField(max_length=50)
    before = models.JSONField(blank=True, null=True, encoder=DjangoJSONEncoder)
    after = models.JSONField(blank=True, null=True, encoder=DjangoJSONEncoder)
    author = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, db_constraint=False, related_name="+"
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = "Auditoria"
        verbose_name_plural = "Auditorias"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["table", "created_at"], name="audit_table_created_idx"),
            models.Index(fields=["action", "created_at"], name="audit_action_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.created_at:%Y-%m-%d %H:%M:%S} | {self.table}:{self.record_id} | {self.action}"

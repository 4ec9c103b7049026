from parish.domain.models import (  # noqa: F401
    Address,
    AuditLog,
    Ministry,
    MinistryMember,
    ParticipationStatus,
    Schedule,
    ScheduleVolunteer,
    User,
    UserRole,
    UserStatus,
)

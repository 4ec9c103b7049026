from rest_framework import serializers

from parish.domain.models import (
    Address,
    Ministry,
    Schedule,
    ScheduleVolunteer,
    User,
    UserRole,
)

# =========================
# Entrada
# =========================

class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)

class AddressSerializer(serializers.ModelSerializer):
    zipCode = serializers.CharField(source="zip_code", max_length=12)

    class Meta:
        model = Address
        fields = ["street", "number", "complement", "neighborhood", "city", "state", "zipCode"]

class MemberWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, allow_null=True)
    cpf = serializers.CharField(max_length=14)
    rg = serializers.CharField(max_length=20)
    address = AddressSerializer()
    password = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False, write_only=True)
    role = serializers.ChoiceField(choices=UserRole.choices)
    ministries = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)

class MemberCreateSerializer(MemberWriteSerializer):
    password = serializers.CharField(min_length=6, trim_whitespace=False, write_only=True)

class MinistryWriteSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    description = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    color = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)

class ScheduleWriteSerializer(serializers.Serializer):
    type = serializers.CharField(max_length=100)
    date = serializers.DateField(input_formats=["%Y-%m-%d"])
    time = serializers.TimeField(input_formats=["%H:%M", "%H:%M:%S"])
    ministryId = serializers.IntegerField(source="ministry_id", min_value=1)
    volunteers = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

class RequestChangeSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)

# =========================
# Saída
# =========================

class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name", "email", "role"]
        read_only_fields = fields

class MinistryDetailSerializer(serializers.ModelSerializer):
    class Meta:
        model = Ministry
        fields = ["id", "name", "color"]
        read_only_fields = fields

class MemberSerializer(serializers.ModelSerializer):
    address = AddressSerializer(read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    ministries = serializers.SerializerMethodField()
    ministryDetails = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id", "name", "email", "phone", "cpf", "rg", "role", "status",
            "address", "ministries", "ministryDetails", "createdAt",
        ]
        read_only_fields = fields

    def get_ministries(self, obj):
        return [mm.ministry_id for mm in obj.ministries.all()]

    def get_ministryDetails(self, obj):
        return MinistryDetailSerializer([mm.ministry for mm in obj.ministries.all()], many=True).data

class MinistrySerializer(serializers.ModelSerializer):
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    membersCount = serializers.SerializerMethodField()

    class Meta:
        model = Ministry
        fields = ["id", "name", "description", "color", "isActive", "createdAt", "membersCount"]
        read_only_fields = fields

    def get_membersCount(self, obj) -> int:
        count = getattr(obj, "members_count", None)
        return count if count is not None else obj.members.count()

class ScheduleVolunteerSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source="volunteer_id", read_only=True)
    participationId = serializers.IntegerField(source="id", read_only=True)
    name = serializers.CharField(source="volunteer.name", read_only=True)
    status = serializers.SerializerMethodField()
    changeReason = serializers.CharField(source="change_reason", read_only=True)

    class Meta:
        model = ScheduleVolunteer
        fields = ["id", "participationId", "name", "status", "changeReason"]
        read_only_fields = fields

    def get_status(self, obj) -> str:
        return obj.status.lower()

class ScheduleSerializer(serializers.ModelSerializer):
    date = serializers.DateField(read_only=True)
    time = serializers.TimeField(format="%H:%M", read_only=True)
    ministryId = serializers.IntegerField(source="ministry_id", read_only=True)
    ministry = serializers.CharField(source="ministry.name", read_only=True)
    ministryColor = serializers.CharField(source="ministry.color", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    volunteers = ScheduleVolunteerSerializer(many=True, read_only=True)

    class Meta:
        model = Schedule
        fields = [
            "id", "date", "time", "type", "ministryId", "ministry", "ministryColor",
            "notes", "createdAt", "volunteers",
        ]
        read_only_fields = fields

class ParticipationRowSerializer(serializers.ModelSerializer):
    """Projeção achatada escala + participação (minhas escalas, todas, relatórios)."""
    scheduleId = serializers.IntegerField(source="schedule_id", read_only=True)
    date = serializers.DateField(source="schedule.date", read_only=True)
    time = serializers.TimeField(source="schedule.time", format="%H:%M", read_only=True)
    type = serializers.CharField(source="schedule.type", read_only=True)
    ministry = serializers.CharField(source="schedule.ministry.name", read_only=True)
    ministryColor = serializers.CharField(source="schedule.ministry.color", read_only=True)
    notes = serializers.CharField(source="schedule.notes", read_only=True)
    volunteerId = serializers.IntegerField(source="volunteer_id", read_only=True)
    volunteer = serializers.CharField(source="volunteer.name", read_only=True)
    status = serializers.SerializerMethodField()
    changeReason = serializers.CharField(source="change_reason", read_only=True)
    confirmedAt = serializers.DateTimeField(source="confirmed_at", read_only=True)
    createdAt = serializers.DateTimeField(source="schedule.created_at", read_only=True)

    class Meta:
        model = ScheduleVolunteer
        fields = [
            "id", "scheduleId", "date", "time", "type", "ministry", "ministryColor", "notes",
            "volunteerId", "volunteer", "status", "changeReason", "confirmedAt", "createdAt",
        ]
        read_only_fields = fields

    def get_status(self, obj) -> str:
        return obj.status.lower()

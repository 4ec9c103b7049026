import django_filters
from django.db.models import Q

from parish.domain.models import ParticipationStatus, ScheduleVolunteer

ALL_SENTINEL = "todos"


class ParticipationReportFilter(django_filters.FilterSet):
    """Filtros do relatório de escalas: status, nome do ministério e busca livre."""
    status = django_filters.CharFilter(method="filter_status")
    ministry = django_filters.CharFilter(method="filter_ministry")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = ScheduleVolunteer
        fields = ["status", "ministry", "search"]

    def filter_status(self, queryset, name, value):
        if value.strip().lower() == ALL_SENTINEL:
            return queryset
        wanted = value.strip().upper()
        # status desconhecido é ignorado
        if wanted not in ParticipationStatus.values:
            return queryset
        return queryset.filter(status=wanted)

    def filter_ministry(self, queryset, name, value):
        if value.strip().lower() == ALL_SENTINEL:
            return queryset
        return queryset.filter(schedule__ministry__name=value)

    def filter_search(self, queryset, name, value):
        term = value.strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(volunteer__name__icontains=term)
            | Q(schedule__type__icontains=term)
            | Q(schedule__ministry__name__icontains=term)
        )

from django.urls import path

from .views import auth, dashboard, members, ministries, reports, schedules

urlpatterns = [
    path("auth/login", auth.login, name="auth_login"),
    path("auth/me", auth.me, name="auth_me"),

    path("members", members.members, name="members"),
    path("members/<int:member_id>", members.member_detail, name="member_detail"),
    path("members/<int:member_id>/toggle-status", members.member_toggle_status, name="member_toggle_status"),

    path("ministries", ministries.ministries, name="ministries"),
    path("ministries/<int:ministry_id>", ministries.ministry_detail, name="ministry_detail"),
    path("ministries/<int:ministry_id>/toggle-status", ministries.ministry_toggle_status, name="ministry_toggle_status"),

    path("schedules/management", schedules.management, name="schedules_management"),
    path("schedules/management/<int:schedule_id>", schedules.management_detail, name="schedules_management_detail"),
    path("schedules/my", schedules.my_schedules, name="schedules_my"),
    path("schedules/all", schedules.all_schedules, name="schedules_all"),
    path("schedules/participation/<int:participation_id>/confirm", schedules.confirm_participation, name="participation_confirm"),
    path("schedules/participation/<int:participation_id>/request-change", schedules.request_change, name="participation_request_change"),

    path("dashboard/summary", dashboard.summary, name="dashboard_summary"),

    path("reports/schedules", reports.schedules_report, name="reports_schedules"),
    path("reports/schedules/export", reports.schedules_export, name="reports_schedules_export"),
]

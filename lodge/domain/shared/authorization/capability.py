"""Capabilities: the closed set of named grants."""

from enum import StrEnum


class Capability(StrEnum):
    """Opaque, unparameterized grant tokens.

    Blanket CRUD grants follow ``<operation>_<resource kind>`` so the
    resource policy can check them generically. Resource-specific nuance
    (grade visibility, ownership) lives in the policy, never in a token.
    """

    # Blanket reads
    READ_MEMBERS = "read_members"
    READ_DOCUMENTS = "read_documents"
    READ_PROGRAMS = "read_programs"

    # Members
    READ_OWN_PROFILE = "read_own_profile"
    MANAGE_MEMBERS = "manage_members"
    MANAGE_MEMBER_STATUS = "manage_member_status"
    VIEW_MEMBER_HEALTH = "view_member_health"

    # Documents
    UPLOAD_DOCUMENTS = "upload_documents"
    MANAGE_ALL_DOCUMENTS = "manage_all_documents"
    APPROVE_SUBMISSIONS = "approve_submissions"

    # Programs and attendance
    CREATE_PROGRAMS = "create_programs"
    MANAGE_PROGRAMS = "manage_programs"
    MANAGE_ALL_PROGRAMS = "manage_all_programs"
    MANAGE_APPRENTICE_PROGRAMS = "manage_apprentice_programs"
    MANAGE_COMPANION_PROGRAMS = "manage_companion_programs"
    COORDINATE_EVENTS = "coordinate_events"
    CONFIRM_ATTENDANCE = "confirm_attendance"
    MANAGE_ATTENDANCE = "manage_attendance"
    MANAGE_APPRENTICE_ATTENDANCE = "manage_apprentice_attendance"
    MANAGE_COMPANION_ATTENDANCE = "manage_companion_attendance"

    # Notifications
    SEND_NOTIFICATIONS = "send_notifications"
    SEND_HEALTH_NOTIFICATIONS = "send_health_notifications"

    # Reports
    VIEW_ALL_REPORTS = "view_all_reports"
    EXPORT_REPORTS = "export_reports"
    VIEW_FINANCIAL_REPORTS = "view_financial_reports"

    # Administration
    MANAGE_USERS = "manage_users"
    SYSTEM_CONFIGURATION = "system_configuration"
    BACKUP_RESTORE = "backup_restore"
    AUDIT_LOGS = "audit_logs"

    @classmethod
    def lookup(cls, token: str) -> "Capability | None":
        """Return the member for ``token``, or None if it names no capability."""
        try:
            return cls(token)
        except ValueError:
            return None

"""Domain event emitters: build a NotificationEvent, resolve it, fan it out."""

import logging
from datetime import UTC, datetime

from lodge.domain.auth.model.grade import GENERAL_CATEGORY
from lodge.domain.auth.model.principal import Principal
from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.document.model.aggregate import Document
from lodge.domain.document.model.value import DocumentKind, DocumentStatus
from lodge.domain.member.model.aggregate import Member
from lodge.domain.notification.model.event import NotificationEvent
from lodge.domain.notification.model.target import (
    AdministrativeCohort,
    Broadcast,
    GradeCohort,
    Single,
    TargetSpec,
)
from lodge.domain.notification.model.value import NotificationCategory, Priority
from lodge.domain.notification.service.fanout import NotificationFanoutService
from lodge.domain.notification.service.targeting import NotificationTargetResolver
from lodge.domain.program.model.aggregate import Program
from lodge.domain.shared.authorization.capability import Capability
from lodge.domain.shared.authorization.policy import ResourcePolicy
from lodge.domain.shared.service import Service

logger = logging.getLogger(__name__)


def _cohort(label: str, exclude: PrincipalId | None) -> TargetSpec:
    if label == GENERAL_CATEGORY:
        return Broadcast(exclude=exclude)
    return GradeCohort(grade=label, exclude=exclude)


class NotificationService(Service):
    target_resolver: NotificationTargetResolver
    fanout: NotificationFanoutService
    policy: ResourcePolicy

    async def publish(self, event: NotificationEvent) -> int:
        recipients = await self.target_resolver.resolve(event.target)
        return await self.fanout.dispatch(event, recipients)

    async def announce(
        self,
        sender: Principal,
        *,
        title: str,
        body: str,
        target: TargetSpec,
        priority: Priority = Priority.NORMAL,
        category: NotificationCategory = NotificationCategory.ADMINISTRATIVE,
        link: str | None = None,
        expires_at: datetime | None = None,
    ) -> int:
        """Send a free-form notification on behalf of an office holder or admin."""
        self.policy.require(sender, Capability.SEND_NOTIFICATIONS)
        event = NotificationEvent(
            title=title,
            body=body,
            category=category,
            priority=priority,
            target=target,
            link=link,
            expires_at=expires_at,
            sender_id=sender.id,
        )
        return await self.publish(event)

    async def notify_document_uploaded(self, document: Document) -> int:
        """Tell everyone who can read the document that it exists."""
        event = NotificationEvent(
            title=f"New document: {document.title}",
            body=(
                f"A new {document.kind} was uploaded to the {document.category} library"
                + (" and awaits moderation." if document.status == DocumentStatus.PENDING else ".")
            ),
            category=NotificationCategory.DOCUMENT,
            priority=Priority.HIGH if document.kind == DocumentKind.SUBMISSION else Priority.NORMAL,
            target=_cohort(document.category, exclude=document.owner_id),
            link=f"/documents/{document.id}",
            link_text="View document",
            related_kind="document",
            related_id=str(document.id),
            sender_id=document.owner_id,
        )
        return await self.publish(event)

    async def notify_document_moderated(self, document: Document) -> int:
        """Tell the author how their submission was moderated."""
        approved = document.status == DocumentStatus.APPROVED
        body = f'Your submission "{document.title}" was {document.status}.'
        if document.moderation_comments:
            body += f" Comments: {document.moderation_comments}"
        event = NotificationEvent(
            title="Submission approved" if approved else "Submission rejected",
            body=body,
            category=NotificationCategory.SUBMISSION,
            priority=Priority.NORMAL if approved else Priority.HIGH,
            target=Single(principal_id=document.owner_id),
            link=f"/documents/{document.id}",
            link_text="View submission",
            related_kind="document",
            related_id=str(document.id),
            sender_id=document.moderated_by,
        )
        return await self.publish(event)

    async def notify_program_scheduled(self, program: Program) -> int:
        when = program.scheduled_for.strftime("%Y-%m-%d %H:%M")
        event = NotificationEvent(
            title=f"New program: {program.topic}",
            body=f"Scheduled for {when}" + (f" at {program.location}." if program.location else "."),
            category=NotificationCategory.PROGRAM,
            target=_cohort(program.grade, exclude=program.owner_id),
            link=f"/programs/{program.id}",
            link_text="View program",
            related_kind="program",
            related_id=str(program.id),
            expires_at=program.scheduled_for,
            sender_id=program.owner_id,
        )
        return await self.publish(event)

    async def notify_member_registered(
        self,
        member: Member,
        registered_by: PrincipalId | None = None,
    ) -> int:
        event = NotificationEvent(
            title="New member registered",
            body=f"{member.full_name} joined as {member.grade.label}.",
            category=NotificationCategory.MEMBER,
            target=AdministrativeCohort(exclude=registered_by),
            link=f"/members/{member.id}",
            link_text="View member",
            related_kind="member",
            related_id=str(member.id),
            sender_id=registered_by,
        )
        return await self.publish(event)

    async def remind_upcoming_program(self, program: Program, now: datetime | None = None) -> int:
        """Reminder for a program; urgent-looking when it is today or tomorrow."""
        now = now or datetime.now(UTC)
        days = program.days_remaining(now)
        if days <= 0:
            when = "today"
        elif days == 1:
            when = "tomorrow"
        else:
            when = f"in {days} days"
        event = NotificationEvent(
            title=f"Reminder: {program.topic} {when}",
            body=(
                f"{program.topic} takes place {when}, "
                f"{program.scheduled_for.strftime('%Y-%m-%d %H:%M')}"
                + (f" at {program.location}." if program.location else ".")
            ),
            category=NotificationCategory.PROGRAM,
            priority=Priority.HIGH if days <= 1 else Priority.NORMAL,
            target=_cohort(program.grade, exclude=None),
            link=f"/programs/{program.id}",
            link_text="View program",
            related_kind="program",
            related_id=str(program.id),
            expires_at=program.scheduled_for,
        )
        logger.debug("Reminding about program %s (%d days left)", program.id, days)
        return await self.publish(event)

"""
Alert Service
Derives the renewal calendar and reminder notifications from stored services
and payments. Nothing here is persisted.
"""

from datetime import datetime
from typing import List, Optional

from domainhub.core.models.entities import (
    ExpiryEvent, Notification, NotificationChannel, NotificationPriority,
    NotificationType, ServiceRef, ServiceStatus,
)
from domainhub.core.services.database_service import DatabaseService, CRITICAL_DAYS, WARNING_DAYS
from domainhub.utils.helpers import StringUtils
from domainhub.utils.responses import unwrap

OVERDUE_CRITICAL_DAYS = 30

class AlertService:
    def __init__(self, service: DatabaseService = None):
        self.service = service or DatabaseService()

    def get_expiry_events(self, days: Optional[int] = None) -> List[ExpiryEvent]:
        """Calendar entries for every domain and hosting account, soonest first.

        With `days`, only services expiring within that many days (expired
        ones included) are returned.
        """
        events = []
        for domain in unwrap(self.service.get_domains(), []):
            events.append(self._to_event(domain, ServiceRef.domain(domain.id), domain.name))
        for hosting in unwrap(self.service.get_hosting(), []):
            name = hosting.package_name
            if hosting.domain_name:
                name = f"{hosting.package_name} ({hosting.domain_name})"
            events.append(self._to_event(hosting, ServiceRef.hosting(hosting.id), name))

        if days is not None:
            events = [e for e in events if e.days_remaining <= days]
        return sorted(events, key=lambda e: e.days_remaining)

    def _to_event(self, record, service: ServiceRef, name: str) -> ExpiryEvent:
        days_remaining = record.days_until_expiry if record.days_until_expiry is not None else 0
        return ExpiryEvent(
            id=f"EXP_{record.id}",
            client_id=record.client_id,
            service=service,
            service_name=name,
            expiry_date=record.expiration_date,
            status=self._status_for(days_remaining),
            renewal_price=record.price,
            currency=record.currency,
            payment_status=record.payment_status,
            days_remaining=days_remaining,
            client_name=record.client_name,
        )

    @staticmethod
    def _status_for(days_remaining: int) -> ServiceStatus:
        if days_remaining <= 0:
            return ServiceStatus.EXPIRED
        if days_remaining <= WARNING_DAYS:
            return ServiceStatus.EXPIRING
        return ServiceStatus.ACTIVE

    def get_notifications(self, days: int = WARNING_DAYS) -> List[Notification]:
        """Expiry reminders and overdue-payment notices, most urgent first"""
        now = datetime.now()
        notifications = []

        for event in self.get_expiry_events(days):
            if event.days_remaining <= 0:
                continue
            priority = (NotificationPriority.CRITICAL if event.days_remaining <= CRITICAL_DAYS
                        else NotificationPriority.HIGH)
            notifications.append(Notification(
                id=StringUtils.generate_id('NOT_'),
                client_id=event.client_id,
                type=NotificationType.EXPIRY_REMINDER,
                title=f"{event.service_name} expires in {event.days_remaining} days",
                message=(f"{event.service.service_type.value.capitalize()} {event.service_name} "
                         f"expires on {event.expiry_date.isoformat()}. "
                         f"Renewal price: {event.renewal_price} {event.currency.value}."),
                channel=NotificationChannel.EMAIL,
                priority=priority,
                service_id=event.service.service_id,
                metadata={'days_remaining': event.days_remaining,
                          'service_type': event.service.service_type.value},
                created_at=now,
            ))

        for payment in unwrap(self.service.get_overdue_payments(), []):
            priority = (NotificationPriority.CRITICAL if payment.days_overdue > OVERDUE_CRITICAL_DAYS
                        else NotificationPriority.HIGH)
            notifications.append(Notification(
                id=StringUtils.generate_id('NOT_'),
                client_id=payment.client_id,
                type=NotificationType.OVERDUE_PAYMENT,
                title=f"Payment overdue by {payment.days_overdue} days",
                message=(f"Invoice {payment.invoice_number or payment.id} for "
                         f"{payment.service_name} ({payment.amount} {payment.currency.value}) "
                         f"was due on {payment.due_date.isoformat()}."),
                channel=NotificationChannel.EMAIL,
                priority=priority,
                service_id=payment.service_id,
                payment_id=payment.id,
                metadata={'days_overdue': payment.days_overdue},
                created_at=now,
            ))

        urgency = {NotificationPriority.CRITICAL: 0, NotificationPriority.HIGH: 1,
                   NotificationPriority.MEDIUM: 2, NotificationPriority.LOW: 3}
        return sorted(notifications, key=lambda n: urgency[n.priority])

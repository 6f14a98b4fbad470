"""RabbitMQ-backed AuditNotifier. Publishes each persisted audit record to a topic exchange."""

from app.audit.models import AuditRecord
from app.infrastructure.messaging.rabbitmq_publisher import RabbitMQPublisher

EXCHANGE_AUDIT_EVENTS = "audit_events"


def _routing_key(record: AuditRecord) -> str:
    """audit.<action>.<entity>, e.g. audit.create.task."""
    return f"audit.{record.action_type.value.lower()}.{record.entity_type.lower()}"


class RabbitMQAuditNotifier:
    """Implements AuditNotifier. Errors propagate to the recorder, which logs and drops them."""

    def __init__(self, publisher: RabbitMQPublisher) -> None:
        self._publisher = publisher

    async def publish(self, record: AuditRecord) -> None:
        await self._publisher.publish(
            EXCHANGE_AUDIT_EVENTS,
            _routing_key(record),
            record.to_dict(),
            record.id or "",
        )

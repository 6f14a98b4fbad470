# app/infrastructure/messaging/rabbitmq_publisher.py

import json
from typing import Dict, Optional

import aio_pika
from aio_pika.abc import AbstractChannel, AbstractExchange, AbstractRobustConnection

from app.config.settings import settings


class RabbitMQPublisher:
    """
    Lazily connected topic-exchange publisher. One robust connection per process;
    exchanges are declared once and reused.
    """

    def __init__(self, url: Optional[str] = None):
        self._url = url or settings.rabbitmq_url
        self._connection: Optional[AbstractRobustConnection] = None
        self._channel: Optional[AbstractChannel] = None
        self._exchanges: Dict[str, AbstractExchange] = {}

    async def connect(self) -> None:
        self._connection = await aio_pika.connect_robust(self._url)
        self._channel = await self._connection.channel(publisher_confirms=True)

    async def _exchange(self, name: str) -> AbstractExchange:
        if self._channel is None:
            await self.connect()
        if name not in self._exchanges:
            self._exchanges[name] = await self._channel.declare_exchange(
                name, aio_pika.ExchangeType.TOPIC, durable=True
            )
        return self._exchanges[name]

    async def publish(self, exchange_name: str, routing_key: str, message: dict, message_id: str) -> None:
        """Publish a JSON body as a persistent message; raises on broker errors."""
        exchange = await self._exchange(exchange_name)
        await exchange.publish(
            aio_pika.Message(
                body=json.dumps(message, default=str).encode(),
                content_type="application/json",
                delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
                message_id=message_id or None,
            ),
            routing_key=routing_key,
        )

    async def close(self) -> None:
        if self._connection is not None:
            await self._connection.close()
        self._connection = None
        self._channel = None
        self._exchanges.clear()

"""Fire-and-forget JSON publishing to RabbitMQ.

A publish returns True when the broker accepted the message and False when
publishing is disabled (no RABBITMQ_URL) or the broker refused it. It is not
a delivery confirmation to any consumer.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator

import pika
from pika.adapters.blocking_connection import BlockingChannel
from pika.exceptions import AMQPError, NackError, UnroutableError

from volunteer_api.core.config import settings
from volunteer_api.db.enums import ExchangeType

logger = logging.getLogger(__name__)

PERSISTENT_DELIVERY_MODE = 2


def is_enabled() -> bool:
    return bool(settings.RABBITMQ_URL.strip())


@contextmanager
def _channel() -> Iterator[BlockingChannel]:
    connection = pika.BlockingConnection(pika.URLParameters(settings.RABBITMQ_URL.strip()))
    try:
        channel = connection.channel()
        channel.confirm_delivery()
        yield channel
    finally:
        if connection.is_open:
            connection.close()


def _encode(message: Any) -> bytes:
    return json.dumps(message, default=str).encode("utf-8")


def _properties() -> pika.BasicProperties:
    return pika.BasicProperties(
        content_type="application/json",
        delivery_mode=PERSISTENT_DELIVERY_MODE,
    )


def send_to_queue(queue: str, message: Any, *, durable: bool = True) -> bool:
    """Publish ``message`` to a named queue (declared if missing)."""
    if not is_enabled():
        logger.info("RabbitMQ disabled, dropping message for queue %s", queue)
        return False
    try:
        with _channel() as channel:
            channel.queue_declare(queue=queue, durable=durable)
            channel.basic_publish(
                exchange="",
                routing_key=queue,
                body=_encode(message),
                properties=_properties(),
            )
    except (UnroutableError, NackError):
        logger.warning("Broker refused message for queue %s", queue)
        return False
    except AMQPError:
        logger.exception("Error sending message to queue %s", queue)
        raise
    logger.debug("Message sent to queue %s", queue)
    return True


def publish_to_exchange(
    exchange: str,
    routing_key: str,
    message: Any,
    exchange_type: ExchangeType | str = ExchangeType.DIRECT,
    *,
    durable: bool = True,
) -> bool:
    """Publish ``message`` to an exchange (declared if missing) with a routing key."""
    if not is_enabled():
        logger.info("RabbitMQ disabled, dropping message for exchange %s", exchange)
        return False
    exchange_type = ExchangeType(exchange_type)
    try:
        with _channel() as channel:
            channel.exchange_declare(
                exchange=exchange,
                exchange_type=exchange_type.value,
                durable=durable,
            )
            channel.basic_publish(
                exchange=exchange,
                routing_key=routing_key,
                body=_encode(message),
                properties=_properties(),
            )
    except (UnroutableError, NackError):
        logger.warning(
            "Broker refused message for exchange %s routing key %s", exchange, routing_key
        )
        return False
    except AMQPError:
        logger.exception("Error publishing message to exchange %s", exchange)
        raise
    logger.debug("Message published to exchange %s with routing key %s", exchange, routing_key)
    return True


def is_connected() -> bool:
    """Open and close a broker connection to check reachability."""
    if not is_enabled():
        return False
    try:
        with _channel():
            return True
    except AMQPError:
        logger.warning("RabbitMQ health check failed", exc_info=True)
        return False

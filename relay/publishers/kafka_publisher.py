from typing import Any, Optional

from confluent_kafka import KafkaException, Producer

from config.settings import KafkaSettings, settings
from relay.exceptions import PublishError
from relay.publishers.base import Publisher
from utils.logger_utils import get_logger

logger = get_logger("Kafka Publisher")

CONTENT_TYPE_HEADER = ("content-type", b"application/json")


class KafkaPublisher(Publisher):
    """
    Fire-and-forget publisher on top of confluent_kafka.Producer.

    Each routing key maps to one topic, ``{topic_prefix}{routing_key}``. Messages are
    handed to the producer's local queue and not awaited; delivery failures reported
    later by the broker are only logged. A full local queue is drained with a bounded
    number of polls before the publish is reported as failed.
    """

    def __init__(
        self,
        kafka_broker_url: str,
        topic_prefix: Optional[str] = None,
        kafka_settings: Optional[KafkaSettings] = None,
        client_id: Optional[str] = None,
    ):
        self.kafka_settings = kafka_settings or settings.kafka
        self.kafka_broker_url = self._parse_broker_urls(kafka_broker_url)
        self.topic_prefix = self.kafka_settings.topic_prefix if topic_prefix is None else topic_prefix

        conf = {
            "bootstrap.servers": self.kafka_broker_url,
            "client.id": client_id or settings.app.name.replace(" ", "-").lower() + "-publisher",
            "linger.ms": self.kafka_settings.producer_linger_ms,
            "compression.type": self.kafka_settings.producer_compression_type,
            "message.max.bytes": self.kafka_settings.producer_message_max_bytes,
            "queue.buffering.max.messages": self.kafka_settings.producer_queue_buffering_max_messages,
        }

        self.producer = Producer(conf)
        logger.info(f"Initialized Kafka publisher connected to: {self.kafka_broker_url}")

    @staticmethod
    def _parse_broker_urls(broker_url: str) -> str:
        """
        Input: "kafka/localhost:9095, localhost:9096"
        Output: "localhost:9095,localhost:9096"
        """
        if broker_url.startswith("kafka/"):
            broker_url = broker_url[len("kafka/"):]

        brokers = [b.strip() for b in broker_url.split(",") if b.strip()]
        if not brokers:
            raise ValueError(f"No Kafka brokers found in '{broker_url}'")
        return ",".join(brokers)

    def topic_for(self, routing_key: str) -> str:
        return f"{self.topic_prefix}{routing_key}"

    @staticmethod
    def _delivery_report(err: Any, msg: Any = None) -> None:
        if err is not None:
            logger.error(f"Message delivery failed: {err}")
        else:
            logger.debug(f"Message delivered to {msg.topic()} [{msg.partition()}] @ offset {msg.offset()}")

    def publish(self, payload: bytes, routing_key: str) -> None:
        topic = self.topic_for(routing_key)
        waits = 0
        while True:
            try:
                self.producer.produce(
                    topic,
                    value=payload,
                    headers=[CONTENT_TYPE_HEADER],
                    on_delivery=self._delivery_report,
                )
                self.producer.poll(0)
                break
            except BufferError as e:
                waits += 1
                if waits > self.kafka_settings.producer_queue_full_max_waits:
                    raise PublishError(f"Local Kafka queue still full after {waits - 1} waits") from e
                logger.warning("Local Kafka queue full. Waiting...")
                self.producer.poll(0.5)
            except KafkaException as e:
                raise PublishError(f"Kafka rejected message for topic {topic}: {e}") from e

        logger.info(f"Message has been sent to topic {topic} ({len(payload)} bytes)")

    def flush(self, timeout: Optional[float] = None) -> int:
        if timeout is None:
            timeout = self.kafka_settings.producer_flush_timeout_seconds
        remaining = self.producer.flush(timeout)
        if remaining > 0:
            logger.warning(f"{remaining} messages were not delivered within {timeout}s")
        return remaining

    def close(self) -> None:
        logger.info("Closing Kafka publisher...")
        self.flush()
        logger.info("Kafka publisher closed.")


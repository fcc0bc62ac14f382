from typing import Optional

from relay.publishers.base import Publisher
from relay.publishers.console_publisher import ConsolePublisher
from relay.publishers.kafka_publisher import KafkaPublisher


def create_publisher(output: Optional[str], topic_prefix: Optional[str] = None) -> Publisher:
    """
    ``None``, "" or "console" prints payloads; "kafka/host:port[,host:port]" or a bare
    broker list publishes to Kafka.
    """
    if output is None or output.strip() in ("", "console"):
        return ConsolePublisher()

    kafka_broker_url = output.strip()
    if kafka_broker_url.startswith("kafka/"):
        kafka_broker_url = kafka_broker_url.split("/", 1)[1]

    if not kafka_broker_url:
        raise ValueError(f"Kafka broker URL could not be determined from output: {output}")

    return KafkaPublisher(kafka_broker_url=kafka_broker_url, topic_prefix=topic_prefix)

from unittest.mock import patch

import pytest
from confluent_kafka import KafkaException

from relay.exceptions import PublishError
from relay.publishers.kafka_publisher import KafkaPublisher


@pytest.fixture
def mock_confluent_producer():
    with patch("relay.publishers.kafka_publisher.Producer") as MockProducer:
        producer_instance = MockProducer.return_value
        producer_instance.poll.return_value = 0
        producer_instance.flush.return_value = 0
        yield producer_instance


@pytest.fixture
def publisher(mock_confluent_producer):
    return KafkaPublisher(kafka_broker_url="kafka/localhost:9095, localhost:9096", topic_prefix="light_client.")


def test_broker_urls_are_parsed(publisher):
    assert publisher.kafka_broker_url == "localhost:9095,localhost:9096"


def test_publish_sends_json_to_routing_key_topic(publisher, mock_confluent_producer):
    publisher.publish(b'[{"gas_used": 21000}]', "eth")

    mock_confluent_producer.produce.assert_called_once()
    call_args = mock_confluent_producer.produce.call_args
    assert call_args.args[0] == "light_client.eth"
    assert call_args.kwargs["value"] == b'[{"gas_used": 21000}]'
    assert ("content-type", b"application/json") in call_args.kwargs["headers"]
    mock_confluent_producer.poll.assert_called_with(0)


def test_publish_does_not_wait_for_delivery(publisher, mock_confluent_producer):
    publisher.publish(b"[]", "eth")

    mock_confluent_producer.flush.assert_not_called()


def test_full_queue_is_drained_before_producing(publisher, mock_confluent_producer):
    mock_confluent_producer.produce.side_effect = [BufferError("Local queue full"), None]

    publisher.publish(b"[]", "eth")

    assert mock_confluent_producer.produce.call_count == 2
    mock_confluent_producer.poll.assert_any_call(0.5)


def test_queue_that_stays_full_fails_publish(publisher, mock_confluent_producer):
    mock_confluent_producer.produce.side_effect = BufferError("Local queue full")

    with pytest.raises(PublishError):
        publisher.publish(b"[]", "eth")

    max_waits = publisher.kafka_settings.producer_queue_full_max_waits
    assert mock_confluent_producer.produce.call_count == max_waits + 1


def test_kafka_error_fails_publish(publisher, mock_confluent_producer):
    mock_confluent_producer.produce.side_effect = KafkaException("Broker: Message size too large")

    with pytest.raises(PublishError, match="light_client.eth"):
        publisher.publish(b"[]", "eth")


def test_close_flushes(publisher, mock_confluent_producer):
    with publisher:
        pass

    mock_confluent_producer.flush.assert_called_once()


def test_empty_broker_list_is_rejected(mock_confluent_producer):
    with pytest.raises(ValueError):
        KafkaPublisher(kafka_broker_url="kafka/")

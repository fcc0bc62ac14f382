from unittest.mock import patch

import pytest

from relay.publishers.console_publisher import ConsolePublisher
from relay.publishers.publisher_creator import create_publisher


@pytest.mark.parametrize("output", [None, "", "console"])
def test_console_outputs(output):
    assert isinstance(create_publisher(output), ConsolePublisher)


@pytest.mark.parametrize("output, broker_url", [
    ("kafka/localhost:9092", "localhost:9092"),
    ("broker-1:9092,broker-2:9092", "broker-1:9092,broker-2:9092"),
])
def test_kafka_outputs(output, broker_url):
    with patch("relay.publishers.publisher_creator.KafkaPublisher") as MockPublisher:
        publisher = create_publisher(output, topic_prefix="test.")

    MockPublisher.assert_called_once_with(kafka_broker_url=broker_url, topic_prefix="test.")
    assert publisher is MockPublisher.return_value


def test_console_publisher_prints_payload(capsys):
    ConsolePublisher(indent=False).publish(b'[{"gas_used":21000}]', "eth")

    assert capsys.readouterr().out.strip() == '[ETH]: [{"gas_used":21000}]'

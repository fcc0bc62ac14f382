import orjson

from relay.publishers.base import Publisher


class ConsolePublisher(Publisher):
    """Prints every payload to stdout instead of sending it, for local debugging."""

    def __init__(self, indent: bool = True):
        self.indent = indent

    def publish(self, payload: bytes, routing_key: str) -> None:
        option = orjson.OPT_INDENT_2 if self.indent else None
        print(f"[{routing_key.upper()}]: {orjson.dumps(orjson.loads(payload), option=option).decode()}")

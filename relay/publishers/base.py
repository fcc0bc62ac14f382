from abc import ABC, abstractmethod


class Publisher(ABC):
    """Delivers one serialized payload per call to the broker route named by ``routing_key``."""

    @abstractmethod
    def publish(self, payload: bytes, routing_key: str) -> None:
        """Raises PublishError when the broker rejects the message or is unreachable."""

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

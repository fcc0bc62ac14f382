from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_CONFIG = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)

# Used when KAFKA_OUTPUT is unset
DEFAULT_BROKER_OUTPUT = "kafka/localhost:9092"


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = ENV_CONFIG

    name: str = Field("Light Receipt Relay", validation_alias="APP_NAME")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


class EthereumSettings(BaseSettings):
    """Settings for the node the relay reads blocks and receipts from."""

    model_config = ENV_CONFIG

    provider_uri: str = Field(
        default="http://localhost:8545",
        validation_alias="PROVIDER_URI",
        description="Ethereum Node JSON-RPC URL(s), comma separated for failover",
    )
    chain_id: Optional[int] = Field(default=1, validation_alias="CHAIN_ID")
    rpc_timeout: int = Field(default=60, gt=0, validation_alias="RPC_TIMEOUT")
    rpc_max_retries: int = Field(default=3, gt=0, validation_alias="RPC_MAX_RETRIES")
    rpc_min_interval: float = Field(default=0.0, ge=0, validation_alias="RPC_MIN_INTERVAL")


class KafkaSettings(BaseSettings):
    """Settings for the Kafka producer the relay publishes with."""

    model_config = ENV_CONFIG

    output: str = Field(
        default=DEFAULT_BROKER_OUTPUT,
        validation_alias="KAFKA_OUTPUT",
        description="Broker connection string, e.g. kafka/localhost:9092, or 'console'",
    )
    topic_prefix: str = Field("light_client.", validation_alias="KAFKA_TOPIC_PREFIX")

    producer_linger_ms: int = Field(default=100, ge=0, validation_alias="KAFKA_PRODUCER_LINGER_MS")
    producer_compression_type: str = Field(default="lz4", validation_alias="KAFKA_PRODUCER_COMPRESSION_TYPE")
    producer_message_max_bytes: int = Field(default=10485760, gt=0, validation_alias="KAFKA_PRODUCER_MESSAGE_MAX_BYTES")
    producer_queue_buffering_max_messages: int = Field(
        default=100000, gt=0, validation_alias="KAFKA_PRODUCER_QUEUE_BUFFERING_MAX_MESSAGES"
    )
    producer_queue_full_max_waits: int = Field(default=20, gt=0, validation_alias="KAFKA_PRODUCER_QUEUE_FULL_MAX_WAITS")
    producer_flush_timeout_seconds: int = Field(default=10, gt=0, validation_alias="KAFKA_PRODUCER_FLUSH_TIMEOUT_SECONDS")


class RelaySettings(BaseSettings):
    """Settings for the receipt derivation and publish pipeline."""

    model_config = ENV_CONFIG

    routing_key: str = Field("eth", validation_alias="RELAY_ROUTING_KEY")
    payload_format: Literal["receipts", "message"] = Field("receipts", validation_alias="RELAY_PAYLOAD_FORMAT")
    fetch_contract_code: bool = Field(False, validation_alias="RELAY_FETCH_CONTRACT_CODE")
    strict_sender_recovery: bool = Field(False, validation_alias="RELAY_STRICT_SENDER_RECOVERY")
    max_concurrent_code_requests: int = Field(default=5, gt=0, validation_alias="RELAY_MAX_CONCURRENT_CODE_REQUESTS")
    period_seconds: int = Field(default=10, gt=0, validation_alias="RELAY_PERIOD_SECONDS")


class Settings(BaseSettings):
    """
    Composes all sub-settings. Each group reads its own flat env vars.
    """

    app: AppSettings = Field(default_factory=AppSettings)
    ethereum: EthereumSettings = Field(default_factory=EthereumSettings)
    kafka: KafkaSettings = Field(default_factory=KafkaSettings)
    relay: RelaySettings = Field(default_factory=RelaySettings)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


# Read once at startup
settings = Settings()

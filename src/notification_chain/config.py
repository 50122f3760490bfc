from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from notification_chain.models import DEFAULT_SENDER

DEFAULT_SYSTEM_NAME = "NotificationSystem"
DEFAULT_TERMINAL_LATENCY_MS = 50


class ChainSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="NOTIFICATION_CHAIN_")

    system_name: str = DEFAULT_SYSTEM_NAME
    default_sender: str = DEFAULT_SENDER
    terminal_latency_ms: int = Field(default=DEFAULT_TERMINAL_LATENCY_MS, ge=0)
    parallel_delegation: bool = False
    random_seed: int | None = None


class EmailConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EMAIL_")

    smtp_server: str = "smtp.gmail.com"
    port: int = 587
    sender_email: str = "noreply@system.com"
    default_subject: str = "Notification"
    immediate_delay_ms: int = Field(default=100, ge=0)
    standard_delay_ms: int = Field(default=200, ge=0)
    transcript_template: str = (
        "Server: {{ server }}:{{ port }}\n"
        "From: {{ sender | header }}\n"
        "To: {{ recipient | header }}\n"
        "Subject: {{ subject | header }}\n"
        "Priority: {{ priority }}\n"
        "\n"
        "{{ body }}"
    )

    def delay_seconds(self, immediate: bool) -> float:
        return (self.immediate_delay_ms if immediate else self.standard_delay_ms) / 1000


class SMSConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SMS_")

    provider: str = "twilio"
    api_key: str = "default-api-key"
    sender_number: str = "+1234567890"
    max_length: int = Field(default=160, gt=3)
    immediate_delay_ms: int = Field(default=50, ge=0)
    standard_delay_ms: int = Field(default=150, ge=0)
    pending_probability: float = Field(default=0.1, ge=0.0, le=1.0)

    def delay_seconds(self, immediate: bool) -> float:
        return (self.immediate_delay_ms if immediate else self.standard_delay_ms) / 1000


class ChatConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CHAT_")

    workspace_url: str = "https://workspace.slack.com"
    bot_token: str = "bot-token"
    bot_name: str = "NotificationBot"
    delay_ms: int = Field(default=75, ge=0)
    rate_limit_delay_ms: int = Field(default=100, ge=0)
    rate_limit_probability: float = Field(default=0.05, ge=0.0, le=1.0)

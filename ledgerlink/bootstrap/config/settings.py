from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from ledgerlink.bootstrap.config.loader import get_configfile
from ledgerlink.infra.http_headers import assert_is_allowed_http_request_headers


class RpcSettings(BaseModel):
    url: Annotated[
        str,
        Field(
            description=(
                "HTTP endpoint of the ledger node's JSON-RPC API.\n"
                "Must be an absolute http:// or https:// URL."
            ),
            default="http://127.0.0.1:8899",
            pattern=r"^https?://",
        )
    ]

    headers: Annotated[
        dict[str, str],
        Field(
            description=(
                "Extra HTTP headers sent with every request, e.g. an Authorization\n"
                "bearer token. Accept, Content-Length and Content-Type are set by\n"
                "the transport and cannot be overridden."
            ),
            default_factory=dict
        )
    ]

    timeout: Annotated[
        float,
        Field(
            description="Maximum time (in seconds) allowed for a single request.",
            default=30.0,
            gt=0,
        )
    ]

    @field_validator("headers")
    @classmethod
    def validate_headers(cls, v: dict[str, str]) -> dict[str, str]:
        assert_is_allowed_http_request_headers(v)
        return v


class SubscriptionsSettings(BaseModel):
    url: Annotated[
        str,
        Field(
            description=(
                "WebSocket endpoint of the ledger node's subscription API.\n"
                "Handed to the subscription transport in use."
            ),
            default="ws://127.0.0.1:8900",
            pattern=r"^wss?://",
        )
    ]


class LedgerLinkConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LEDGERLINK_",
        env_nested_delimiter="__",
        extra="allow"
    )

    rpc: Annotated[
        RpcSettings,
        Field(
            description="Request/response transport configuration.",
            default_factory=RpcSettings
        )
    ]

    subscriptions: Annotated[
        SubscriptionsSettings,
        Field(
            description="Subscription transport configuration.",
            default_factory=SubscriptionsSettings
        )
    ]

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        Field(
            description="Default logging verbosity, overridden by --log-level.",
            default="INFO"
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=get_configfile()),
        )

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class _Notification(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    slot: Annotated[int, Field(description="The newly updated slot.", ge=0)]

    timestamp: Annotated[
        int,
        Field(description="Unix timestamp of the update, in milliseconds.")
    ]


class SlotUpdateNotification(_Notification):
    type: Literal["completed", "firstShredReceived", "optimisticConfirmation", "root"]


class CreatedBankNotification(_Notification):
    type: Literal["createdBank"]

    parent: Annotated[int, Field(description="The parent slot.", ge=0)]


class DeadSlotNotification(_Notification):
    type: Literal["dead"]

    err: Annotated[str, Field(description="Reason the slot died.")]


class FrozenSlotStats(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    max_transactions_per_entry: int
    num_failed_transactions: int
    num_successful_transactions: int
    num_transaction_entries: int


class FrozenSlotNotification(_Notification):
    type: Literal["frozen"]

    stats: FrozenSlotStats


SlotsUpdatesNotification = Annotated[
    Union[
        SlotUpdateNotification,
        CreatedBankNotification,
        DeadSlotNotification,
        FrozenSlotNotification,
    ],
    Field(discriminator="type"),
]
"""
Notification pushed by a `slotsUpdatesSubscribe` subscription. The shape
depends on `type`, which pydantic uses to pick the variant before
validating the remaining fields.
"""

_slots_updates_adapter: TypeAdapter[SlotsUpdatesNotification] = TypeAdapter(SlotsUpdatesNotification)


def parse_slots_updates_notification(data: dict[str, Any]) -> SlotsUpdatesNotification:
    """Validate a raw notification; raises pydantic.ValidationError."""
    return _slots_updates_adapter.validate_python(data)

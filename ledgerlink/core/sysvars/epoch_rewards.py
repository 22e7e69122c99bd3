from dataclasses import dataclass
from typing import Any

from ledgerlink.core.codecs.base import Buffer, Codec
from ledgerlink.core.codecs.combinators import get_struct_codec, transform_codec
from ledgerlink.core.codecs.numbers import get_u64_codec, get_u128_codec
from ledgerlink.core.codecs.primitives import get_boolean_codec
from ledgerlink.core.types.blockhash import Blockhash, get_blockhash_codec
from ledgerlink.core.types.lamports import Lamports, get_default_lamports_codec

SYSVAR_EPOCH_REWARDS_ADDRESS = "SysvarEpochRewards1111111111111111111111111"

SYSVAR_EPOCH_REWARDS_SIZE = 81


@dataclass(frozen=True, slots=True)
class SysvarEpochRewards:
    """
    Tracks whether the rewards period (calculation and distribution) is in
    progress, and the details needed to resume distribution when starting
    from a snapshot during that period.

    The account is repopulated at the start of the first block of each
    epoch, so it describes the current epoch until a new one begins.
    """
    distribution_starting_block_height: int
    """Starting block height of the rewards distribution in the current epoch."""

    num_partitions: int
    """Number of partitions in the rewards distribution of the current epoch."""

    parent_blockhash: Blockhash
    """Blockhash of the parent of the first block in the epoch."""

    total_points: int
    """Sum of (delegated stake * credits observed) for all delegations."""

    total_rewards: Lamports
    """Total rewards for the current epoch."""

    distributed_rewards: Lamports
    """Rewards distributed so far in the current epoch."""

    active: bool
    """Whether the rewards period is active."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "distribution_starting_block_height": self.distribution_starting_block_height,
            "num_partitions": self.num_partitions,
            "parent_blockhash": self.parent_blockhash,
            "total_points": self.total_points,
            "total_rewards": self.total_rewards,
            "distributed_rewards": self.distributed_rewards,
            "active": self.active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SysvarEpochRewards":
        return cls(**data)


def get_sysvar_epoch_rewards_codec() -> Codec[SysvarEpochRewards]:
    """
    Codec for the EpochRewards account data. The field order below is the
    on-chain layout and must not be changed.
    """
    layout = get_struct_codec([
        ("distribution_starting_block_height", get_u64_codec()),
        ("num_partitions", get_u64_codec()),
        ("parent_blockhash", get_blockhash_codec()),
        ("total_points", get_u128_codec()),
        ("total_rewards", get_default_lamports_codec()),
        ("distributed_rewards", get_default_lamports_codec()),
        ("active", get_boolean_codec()),
    ])
    return transform_codec(layout, SysvarEpochRewards.to_dict, SysvarEpochRewards.from_dict)


def decode_sysvar_epoch_rewards(data: Buffer) -> SysvarEpochRewards:
    return get_sysvar_epoch_rewards_codec().decode(data)

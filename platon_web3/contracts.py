"""System contract handles — an encoded address plus the node method group."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from .codec import BlockTag
from .models import Call, RPCResponse

if TYPE_CHECKING:
    from .client import Platon


@dataclass(frozen=True)
class SystemContract:
    platon: Platon
    address: str

    name: ClassVar[str] = ""

    async def call(self, data: bytes | str, block: BlockTag = "latest") -> RPCResponse[str]:
        """Read-only call against this contract with pre-encoded ``data``."""
        return await self.platon.call(Call(to=self.address, data=data), block)


class StakingContract(SystemContract):
    name = "staking"


class ProposalContract(SystemContract):
    name = "proposal"


class SlashContract(SystemContract):
    name = "slash"


class RestrictingPlanContract(SystemContract):
    name = "restricting"


class RewardContract(SystemContract):
    name = "reward"

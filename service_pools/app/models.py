"""
Pool record models and the protocol variant table.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter


class ChainId(IntEnum):
    """Networks pools can be cached for."""

    MAINNET = 1
    ROPSTEN = 3
    RINKEBY = 4
    GOERLI = 5
    KOVAN = 42
    OPTIMISM = 10
    OPTIMISTIC_KOVAN = 69
    ARBITRUM_ONE = 42161
    ARBITRUM_RINKEBY = 421611
    POLYGON = 137
    POLYGON_MUMBAI = 80001
    CELO = 42220
    CELO_ALFAJORES = 44787


class Protocol(str, Enum):
    """Pool schema families."""

    V2 = "V2"
    V3 = "V3"


class SubgraphPool(BaseModel):
    """Common base for pool records.

    Records are opaque: any JSON object is accepted and every value is kept
    as decoded. The named fields only document the usual payload.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[Any] = None
    token0: Optional[Any] = None
    token1: Optional[Any] = None


class V2SubgraphPool(SubgraphPool):
    """V2 pool record."""

    supply: Optional[Any] = None
    reserve: Optional[Any] = None
    reserveUSD: Optional[Any] = None


class V3SubgraphPool(SubgraphPool):
    """V3 pool record."""

    feeTier: Optional[Any] = None
    liquidity: Optional[Any] = None
    tvlETH: Optional[Any] = None
    tvlUSD: Optional[Any] = None


T = TypeVar("T", bound=SubgraphPool)


@dataclass(frozen=True)
class PoolVariant(Generic[T]):
    """Binds a protocol tag to the record model its payloads decode into."""

    protocol: Protocol
    record_type: Type[T]
    _adapter: TypeAdapter = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_adapter", TypeAdapter(List[self.record_type]))

    def parse(self, payload: Any) -> List[T]:
        """Wrap each object of a decoded JSON array. Raises pydantic.ValidationError for non-objects."""
        return self._adapter.validate_python(payload)


POOL_VARIANTS: Dict[Protocol, PoolVariant] = {
    Protocol.V2: PoolVariant(Protocol.V2, V2SubgraphPool),
    Protocol.V3: PoolVariant(Protocol.V3, V3SubgraphPool),
}


def get_pool_variant(protocol: Protocol) -> PoolVariant:
    """Look up the variant configuration for a protocol."""
    return POOL_VARIANTS[Protocol(protocol)]

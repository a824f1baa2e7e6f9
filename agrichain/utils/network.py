# agrichain/utils/network.py
import asyncio
import functools
import random
from typing import Optional

from agrichain.domain.errors import TransientNetworkError
from agrichain.utils.settings import FAULT_RATE, LATENCY_MS, SIMULATE_NETWORK
from agrichain.utils.logging import get_logger

logger = get_logger(__name__)

READ = "read"
WRITE = "write"
AGGREGATE = "aggregate"
TRACE = "trace"
MAINTENANCE = "maintenance"


class LatencyPolicy:
    def delay(self, operation: str) -> float:
        """Opoznienie w sekundach dla danej klasy operacji."""
        raise NotImplementedError


class NoLatency(LatencyPolicy):
    def delay(self, operation: str) -> float:
        return 0.0


class UniformLatency(LatencyPolicy):
    def __init__(self, ranges_ms: Optional[dict] = None, rng: Optional[random.Random] = None):
        self.ranges_ms = ranges_ms or LATENCY_MS
        self.rng = rng or random.Random()

    def delay(self, operation: str) -> float:
        low, high = self.ranges_ms[operation]
        return self.rng.randint(low, high) / 1000


class FaultPolicy:
    def should_fail(self, operation: str) -> bool:
        raise NotImplementedError


class NoFaults(FaultPolicy):
    def should_fail(self, operation: str) -> bool:
        return False


class RandomFaults(FaultPolicy):
    """Kazde wywolanie losuje niezaleznie, operacje serwisowe nigdy nie padaja."""

    def __init__(
        self,
        rate: float = FAULT_RATE,
        rng: Optional[random.Random] = None,
        exempt: tuple = (MAINTENANCE,),
    ):
        self.rate = rate
        self.rng = rng or random.Random()
        self.exempt = exempt

    def should_fail(self, operation: str) -> bool:
        if operation in self.exempt:
            return False
        return self.rng.random() < self.rate


class NetworkSimulator:
    """
    Opakowanie kazdej operacji repozytorium: losowe opoznienie + rzadki blad sieci.
    Nigdy nie dotyka danych.
    """

    def __init__(self, latency: Optional[LatencyPolicy] = None, faults: Optional[FaultPolicy] = None):
        self.latency = latency or NoLatency()
        self.faults = faults or NoFaults()

    @classmethod
    def from_settings(cls) -> "NetworkSimulator":
        if not SIMULATE_NETWORK:
            return cls()
        return cls(UniformLatency(), RandomFaults())

    async def simulate(self, operation: str) -> None:
        delay = self.latency.delay(operation)
        if delay:
            logger.debug(f"Simulating {delay * 1000:.0f}ms delay for {operation}")
            await asyncio.sleep(delay)

        if self.faults.should_fail(operation):
            logger.warning(f"Injected network failure for {operation} operation")
            raise TransientNetworkError()


def simulated(operation: str):
    """Dekorator dla async metod obiektow ktore maja atrybut .network"""

    def decorator(fn):
        @functools.wraps(fn)
        async def wrapper(self, *args, **kwargs):
            await self.network.simulate(operation)
            return await fn(self, *args, **kwargs)

        return wrapper

    return decorator

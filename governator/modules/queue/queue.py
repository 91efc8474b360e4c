import logging
import time
from typing import Callable, Optional, Union

from governator.modules.models import MetadataNotFoundError, RequestMetadata

logger = logging.getLogger(__name__)

DEPLOYS_KEY = "governator:deploys"
METADATA_FIELD = "request:metadata"
CANCELLATION_FIELD = "cancellation"


def _decode(value: Union[bytes, str]) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


class DeployQueue:
    def __init__(
        self,
        redis_client,
        queue_name: str,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize deploy queue.

        Args:
            redis_client: Async Redis client, borrowed and never closed here
            queue_name: Namespace prefix shared with the deploy scheduler
            clock: Returns the current Unix time in seconds
        """
        self.redis = redis_client
        self.queue_name = queue_name
        self.clock = clock

    def get_key(self, key: str) -> str:
        """Namespace a key under the queue name."""
        return f"{self.queue_name}:{key}"

    @property
    def deploys_key(self) -> str:
        return self.get_key(DEPLOYS_KEY)

    async def next_deploy(self) -> Optional[str]:
        """
        Find the earliest deploy that is due.

        Returns:
            Deploy identifier, or None when nothing is due

        Logic:
        1. ZRANGEBYSCORE from -inf to now, limited to one member
        2. Lowest score comes first, so that member is the earliest due
        """
        now = int(self.clock())
        deploys = await self.redis.zrangebyscore(
            self.deploys_key, "-inf", now, start=0, num=1
        )

        if not deploys:
            return None

        return _decode(deploys[0])

    async def lock_deploy(self, deploy: str) -> bool:
        """
        Claim a deploy by removing it from the schedule.

        ZREM is atomic, so exactly one consumer sees a non-zero count
        for a given deploy.

        Returns:
            True if this consumer removed the deploy
        """
        logger.debug(f"Locking deploy: {deploy}")
        removed = await self.redis.zrem(self.deploys_key, deploy)
        return removed != 0

    async def validate_deploy(self, deploy: str) -> bool:
        """
        Check that a claimed deploy has not been cancelled.

        Returns:
            False if the deploy record carries a cancellation field
        """
        logger.debug(f"Checking cancellation of deploy: {deploy}")
        cancelled = await self.redis.hexists(self.get_key(deploy), CANCELLATION_FIELD)
        return not cancelled

    async def get_metadata(self, deploy: str) -> RequestMetadata:
        """
        Load the request metadata of a claimed deploy.

        Raises:
            MetadataNotFoundError: If the field is absent
            pydantic.ValidationError: If the field is not valid metadata JSON
        """
        logger.debug(f"Loading metadata of deploy: {deploy}")
        raw = await self.redis.hget(self.get_key(deploy), METADATA_FIELD)

        if raw is None:
            raise MetadataNotFoundError(deploy)

        return RequestMetadata.model_validate_json(raw)

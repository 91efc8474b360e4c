import logging

from governator.modules.cluster import SwarmCluster
from governator.modules.models import CycleOutcome, RequestMetadata, parse_image_reference
from governator.modules.queue import DeployQueue
from governator.modules.tracker import DeployStateClient

logger = logging.getLogger(__name__)


class Deployer:
    """Claims due deploys from the queue and rolls them out to the swarm."""

    def __init__(
        self,
        queue: DeployQueue,
        cluster: SwarmCluster,
        deploy_state: DeployStateClient,
    ):
        self.queue = queue
        self.cluster = cluster
        self.deploy_state = deploy_state

    async def run(self) -> CycleOutcome:
        """
        Run a single deploy cycle.

        Returns:
            CycleOutcome describing which path the cycle took

        Logic:
        1. Select the earliest due deploy (IDLE if none)
        2. Claim it with ZREM (LOST_CLAIM if another deployer won)
        3. Check for a cancellation marker (CANCELLED if present)
        4. Load its metadata, update the service, notify deploy-state

        Any error after step 2 leaves the deploy removed from the queue.
        """
        deploy = await self.queue.next_deploy()
        if deploy is None:
            return CycleOutcome.IDLE

        if not await self.queue.lock_deploy(deploy):
            logger.debug(f"Failed to obtain lock for: {deploy}")
            return CycleOutcome.LOST_CLAIM

        if not await self.queue.validate_deploy(deploy):
            logger.info(f"Deploy was cancelled: {deploy}")
            return CycleOutcome.CANCELLED

        metadata = await self.queue.get_metadata(deploy)
        await self.deploy(metadata)

        logger.info(f"Deployed {deploy}: {metadata.docker_url}")
        return CycleOutcome.DEPLOYED

    async def deploy(self, metadata: RequestMetadata) -> None:
        """
        Roll the requested image out and report it as passed.

        Raises:
            InvalidImageReferenceError: Before touching the cluster
            docker.errors.APIError: If the service lookup or update fails
            DeployStateError: If the update went out but the report failed
        """
        image = parse_image_reference(metadata.docker_url)

        service = await self.cluster.inspect_service(image.repo)
        await self.cluster.update_image(service, image.url)

        await self.deploy_state.notify_passed(image)

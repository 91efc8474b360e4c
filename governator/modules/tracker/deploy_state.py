import logging

import httpx

from governator.modules.models import DeployStateError, ImageReference

logger = logging.getLogger(__name__)


class DeployStateClient:
    def __init__(self, http_client: httpx.AsyncClient, deploy_state_uri: str, cluster: str):
        """
        Initialize deploy-state client.

        Args:
            http_client: Async HTTP client, borrowed and never closed here
            deploy_state_uri: Service base URI; basic auth credentials go in its userinfo
            cluster: Name of the cluster this deployer rolls out to
        """
        self.http = http_client
        self.deploy_state_uri = deploy_state_uri.rstrip("/")
        self.cluster = cluster

    def deployment_url(self, image: ImageReference) -> str:
        """Build the URL that marks a deployment as passed on this cluster."""
        path = f"deployments/{image.owner}/{image.repo}/{image.tag}/cluster/{self.cluster}/passed"
        return f"{self.deploy_state_uri}/{path}"

    async def notify_passed(self, image: ImageReference) -> None:
        """
        Mark the deployment of an image as passed.

        Raises:
            DeployStateError: If the service responds with a status above 399
            httpx.HTTPError: If the request cannot be made
        """
        url = self.deployment_url(image)
        logger.debug(f"PUT {url}")

        response = await self.http.put(url)
        logger.debug(f"Deploy-state responded with {response.status_code}")

        if response.status_code > 399:
            raise DeployStateError(response.status_code, url=url)

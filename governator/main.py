#!/usr/bin/env python3
"""
Governator - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration from flags and environment
2. Builds the Redis, Docker and HTTP clients
3. Runs deploy cycles until SIGTERM

All deploy logic is in the modules, following black box principles.
"""

import asyncio
import logging
import signal
from typing import Optional

import click
import docker
import httpx
import redis.asyncio as redis
from dotenv import load_dotenv

from governator import __version__
from governator.config import DEFAULT_DOCKER_API_VERSION, DEFAULT_DOCKER_URI, DeployerConfig
from governator.logging_config import configure_logging
from governator.modules.cluster import SwarmCluster, parse_docker_host
from governator.modules.deployer import Deployer
from governator.modules.queue import DeployQueue
from governator.modules.tracker import DeployStateClient

logger = logging.getLogger(__name__)

USER_AGENT = "governator-swarm"


def get_redis_client(config: DeployerConfig) -> redis.Redis:
    """Create Redis client from configuration."""
    return redis.from_url(config.redis_uri, decode_responses=True)


def get_docker_client(config: DeployerConfig) -> docker.DockerClient:
    """Create Docker client speaking the configured Engine API version."""
    return docker.DockerClient(
        base_url=config.docker_uri,
        version=config.docker_api_version,
        user_agent=USER_AGENT,
    )


def build_deployer(
    config: DeployerConfig,
    redis_client,
    docker_client,
    http_client: httpx.AsyncClient,
) -> Deployer:
    """Wire the modules together around borrowed clients."""
    return Deployer(
        queue=DeployQueue(redis_client, config.redis_queue),
        cluster=SwarmCluster(docker_client),
        deploy_state=DeployStateClient(http_client, config.deploy_state_uri, config.cluster),
    )


async def supervise(
    deployer: Deployer,
    interval: float,
    stop_event: asyncio.Event,
    exit_on_error: bool = False,
) -> None:
    """
    Run deploy cycles until stop_event is set.

    A cycle in progress always finishes before the loop checks the event.
    With exit_on_error the first failed cycle is re-raised; otherwise it
    is logged and the next cycle runs after the usual interval.
    """
    while not stop_event.is_set():
        logger.debug("Starting deploy cycle")
        try:
            outcome = await deployer.run()
            logger.debug(f"Cycle finished: {outcome.value}")
        except Exception as e:
            logger.exception(f"Run error: {e}")
            if exit_on_error:
                raise

        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass

    logger.info("I'll be back.")


async def serve(config: DeployerConfig, stop_event: Optional[asyncio.Event] = None) -> None:
    """Build clients, run the supervise loop and close the clients afterwards."""
    stop_event = stop_event or asyncio.Event()
    loop = asyncio.get_running_loop()

    def request_stop(signame: str) -> None:
        logger.info(f"{signame} received, waiting to exit")
        stop_event.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, request_stop, sig.name)

    redis_client = None
    docker_client = None
    http_client = None

    try:
        redis_client = get_redis_client(config)
        # Contacts the daemon when the API version is negotiated
        docker_client = get_docker_client(config)
        http_client = httpx.AsyncClient(timeout=config.deploy_state_timeout)

        deployer = build_deployer(config, redis_client, docker_client, http_client)
        logger.info(f"Governator deploying queue {config.redis_queue} to cluster {config.cluster}")
        await supervise(deployer, config.interval, stop_event, config.exit_on_error)
    finally:
        if http_client is not None:
            await http_client.aclose()
        if redis_client is not None:
            await redis_client.aclose()
        if docker_client is not None:
            docker_client.close()


@click.command()
@click.version_option(__version__, prog_name="governator-swarm")
@click.option(
    "--docker-uri",
    "-d",
    envvar="GOVERNATOR_DOCKER_URI",
    default=DEFAULT_DOCKER_URI,
    show_default=True,
    help="Docker server to deploy to",
)
@click.option(
    "--redis-uri", "-r", envvar="GOVERNATOR_REDIS_URI", help="Redis server to pull deployments from"
)
@click.option(
    "--redis-queue", "-q", envvar="GOVERNATOR_REDIS_QUEUE", help="Redis queue to pull deployments from"
)
@click.option(
    "--deploy-state-uri",
    envvar="DEPLOY_STATE_URI",
    help="Deploy state uri, it should include authentication.",
)
@click.option("--cluster", envvar="CLUSTER", help="The current running cluster")
@click.option(
    "--docker-api-version",
    envvar="GOVERNATOR_DOCKER_API_VERSION",
    default=DEFAULT_DOCKER_API_VERSION,
    show_default=True,
    help="Docker Engine API version to speak",
)
@click.option(
    "--interval",
    envvar="GOVERNATOR_INTERVAL",
    type=float,
    default=1.0,
    show_default=True,
    help="Seconds to wait between deploy cycles",
)
@click.option(
    "--exit-on-error/--no-exit-on-error",
    envvar="GOVERNATOR_EXIT_ON_ERROR",
    default=False,
    show_default=True,
    help="Exit non-zero on the first failed deploy cycle",
)
@click.option(
    "--deploy-state-timeout",
    envvar="DEPLOY_STATE_TIMEOUT",
    type=float,
    default=10.0,
    show_default=True,
    help="Seconds to wait for the deploy state service",
)
@click.option(
    "--log-level",
    envvar="LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Minimum level of log messages to print",
)
@click.pass_context
def main(ctx: click.Context, **options) -> None:
    """Deploy scheduled images from a Redis queue to Docker Swarm services."""
    config = DeployerConfig(**options)

    if not config.is_complete:
        click.echo(ctx.get_help())
        for message in config.missing_messages():
            click.secho(f"  {message}", fg="red", err=True)
        ctx.exit(1)

    try:
        parse_docker_host(config.docker_uri)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="'--docker-uri'")

    configure_logging(config.log_level)

    try:
        asyncio.run(serve(config))
    except Exception as e:
        logger.critical(f"Governator stopped: {e}", exc_info=True)
        ctx.exit(1)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    main()


if __name__ == "__main__":
    run()

"""blacklister 워커 진입점

    python -m src.worker
"""

import asyncio

from src.core.logging import logger
from src.process import BlacklisterProcess, Feature, Provider


async def run_process(process, provider: Provider) -> None:
    """프로세스 초기화 후 구독자 실행 (취소될 때까지)"""
    logger.info(f"Starting process {process.name}...")
    process.initialize(provider)

    if Feature.EVENT not in process.features:
        logger.info(f"Process {process.name} has no event feature, nothing to consume")
        return

    subscriber = provider.subscriber()
    for definition in process.subscribers():
        subscriber.subscribe(definition)

    logger.info(f"Process {process.name} started")
    await subscriber.run()


async def amain() -> None:
    provider = Provider()
    try:
        await run_process(BlacklisterProcess(), provider)
    finally:
        logger.info("Shutting down process...")
        await provider.close()


def main() -> None:
    try:
        asyncio.run(amain())
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()

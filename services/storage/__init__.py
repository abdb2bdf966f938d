"""Quiz result storage for QuizForge."""

import logging
from typing import Optional

from config.settings import StorageConfig, get_storage_config
from .base import ResultStore
from .local_result_store import LocalResultStore
from .s3_result_store import S3ResultStore

logger = logging.getLogger(__name__)


def get_result_store(config: Optional[StorageConfig] = None) -> ResultStore:
    """Return the local or S3 result store depending on the configured env."""
    config = config or get_storage_config()
    if config.env == "local":
        logger.info(f"Result store running in LOCAL mode. Root: {config.local_root}")
        return LocalResultStore(config.local_root)

    logger.info(f"Result store running in AWS mode. Bucket: {config.results_bucket}")
    return S3ResultStore(config.results_bucket, config.region)


__all__ = ["ResultStore", "LocalResultStore", "S3ResultStore", "get_result_store"]

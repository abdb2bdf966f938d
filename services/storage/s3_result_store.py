import logging
from typing import List, Optional

import boto3
from botocore.exceptions import ClientError
from pydantic import ValidationError

from config.models import QuizResult
from .base import ResultStore, user_segment

logger = logging.getLogger(__name__)


class S3ResultStore(ResultStore):
    """Result store backed by an S3 bucket."""

    def __init__(self, bucket: str, region: str, client=None):
        self.bucket = bucket
        self.s3 = client or boto3.client("s3", region_name=region)

    def _prefix(self, user: Optional[str]) -> str:
        return f"users/{user_segment(user)}/results/"

    def save(self, result: QuizResult) -> str:
        key = f"{self._prefix(result.user)}{result.result_id}.json"
        self.s3.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=result.model_dump_json(indent=2).encode("utf-8"),
            ContentType="application/json",
            Metadata={"result_id": result.result_id, "user": result.user or ""},
        )
        logger.info(f"[AWS] Saved quiz result → s3://{self.bucket}/{key}")
        return f"s3://{self.bucket}/{key}"

    def find_by_user_order_by_time_desc(self, user: str) -> List[QuizResult]:
        results = []
        for key in self._list_keys(self._prefix(user)):
            result = self._load_result(key)
            if result:
                results.append(result)
        return self._owned_recent_first(user, results)

    # ------------------------------------------------------------------
    # S3 Utilities
    # ------------------------------------------------------------------
    def _list_keys(self, prefix: str) -> List[str]:
        """List result JSON keys under `prefix` (with pagination)."""
        keys = []
        paginator = self.s3.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            for obj in page.get("Contents", []):
                if obj["Key"].endswith(".json"):
                    keys.append(obj["Key"])
        return keys

    def _load_result(self, key: str) -> Optional[QuizResult]:
        try:
            obj = self.s3.get_object(Bucket=self.bucket, Key=key)
            return QuizResult.model_validate_json(obj["Body"].read().decode("utf-8"))
        except ClientError as e:
            logger.error(f"S3 error loading {key}: {e}")
            return None
        except ValidationError as e:
            logger.error(f"Invalid quiz result at s3://{self.bucket}/{key}: {e}")
            return None

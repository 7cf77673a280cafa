"""Attachment stores: S3 for deployed stacks, memory for local runs."""

import uuid
from typing import Dict

import boto3

from models.article import AttachmentRef


class S3AttachmentStore:
    """Minimal helper around S3 for article attachment blobs."""

    def __init__(self, bucket_name: str, prefix: str = "attachments/"):
        self.bucket_name = bucket_name
        self.prefix = prefix
        self.client = boto3.client("s3")

    def put(self, filename: str, content_type: str, data: bytes) -> AttachmentRef:
        """Upload a blob (Intelligent-Tiering) and return its reference."""
        attachment_id = str(uuid.uuid4())
        key = f"{self.prefix}{attachment_id}/{filename}"
        self.client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=data,
            ContentType=content_type,
            StorageClass="INTELLIGENT_TIERING",
        )
        return AttachmentRef(
            id=attachment_id,
            filename=filename,
            content_type=content_type,
            size=len(data),
            store_key=key,
        )

    def get(self, ref: AttachmentRef) -> bytes:
        resp = self.client.get_object(Bucket=self.bucket_name, Key=ref.store_key)
        return resp["Body"].read()


class MemoryAttachmentStore:
    """Keeps blobs in a dict keyed by store key."""

    def __init__(self) -> None:
        self.blobs: Dict[str, bytes] = {}

    def put(self, filename: str, content_type: str, data: bytes) -> AttachmentRef:
        attachment_id = str(uuid.uuid4())
        key = f"{attachment_id}/{filename}"
        self.blobs[key] = data
        return AttachmentRef(
            id=attachment_id,
            filename=filename,
            content_type=content_type,
            size=len(data),
            store_key=key,
        )

    def get(self, ref: AttachmentRef) -> bytes:
        return self.blobs[ref.store_key]

import boto3
import os
from botocore.config import Config
from urllib.error import HTTPError, URLError
from urllib.request import urlopen

_S3_CONFIG = Config(signature_version="s3v4")

# Bucket -> region, so GetBucketLocation runs once per bucket per process
_BUCKET_REGION_CACHE: dict[str, str] = {}


def _client(region: str | None = None):
    region = region or os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
    if region:
        return boto3.client("s3", region_name=region, config=_S3_CONFIG)
    return boto3.client("s3", config=_S3_CONFIG)


def _bucket_region(bucket: str) -> str:
    if bucket not in _BUCKET_REGION_CACHE:
        # GetBucketLocation answers from us-east-1; None / "" also means us-east-1
        resp = _client("us-east-1").get_bucket_location(Bucket=bucket)
        _BUCKET_REGION_CACHE[bucket] = resp.get("LocationConstraint") or "us-east-1"
    return _BUCKET_REGION_CACHE[bucket]


def fetch_object_bytes(bucket: str, key: str) -> bytes:
    """Read a resume object with a client pinned to the bucket's own region."""
    s3 = _client(_bucket_region(bucket))
    obj = s3.get_object(Bucket=bucket, Key=key)
    return obj["Body"].read()


def download_presigned(url: str, timeout: int = 60) -> bytes:
    try:
        with urlopen(url, timeout=timeout) as resp:
            return resp.read()
    except HTTPError as e:
        raise RuntimeError(f"Failed to download resume (HTTP {e.code})") from e
    except URLError as e:
        raise RuntimeError("Failed to download resume (network error)") from e

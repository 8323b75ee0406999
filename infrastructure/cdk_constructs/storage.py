"""S3 bucket for static website hosting."""

from typing import Any

from aws_cdk import RemovalPolicy
from aws_cdk import aws_s3 as s3
from constructs import Construct

from .base import DeclaredResource


class StorageBucket(DeclaredResource):
  """S3 bucket configured for static website hosting."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    attributes: dict[str, Any],
    region: str | None = None,
  ) -> None:
    super().__init__(scope, id, attributes=attributes, region=region)

    removal_policy = attributes.get("removal_policy", RemovalPolicy.RETAIN)
    public_read = attributes.get("access") == "public-read"

    self.bucket = s3.Bucket(
      self,
      "Bucket",
      bucket_name=attributes["bucket_name"],  # Must match the site domain
      website_index_document=attributes["index_document"],
      public_read_access=public_read,
      block_public_access=s3.BlockPublicAccess(
        block_public_acls=False,
        ignore_public_acls=False,
        block_public_policy=False,
        restrict_public_buckets=False,
      )
      if public_read
      else s3.BlockPublicAccess.BLOCK_ALL,
      removal_policy=removal_policy,
      auto_delete_objects=removal_policy == RemovalPolicy.DESTROY,
    )

    self.outputs = {
      "arn": self.bucket.bucket_arn,
      "bucket_name": self.bucket.bucket_name,
      "website_endpoint": self.bucket.bucket_website_domain_name,
    }

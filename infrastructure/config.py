"""Configuration loader for static site declarations."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml
from aws_cdk import RemovalPolicy

from infrastructure.domain import decompose

# CloudFront only accepts ACM certificates issued in us-east-1.
CERTIFICATE_REGION = "us-east-1"

TEN_MINUTES = 60 * 10


@dataclass
class SiteConfig:
  """Configuration for a single static site."""

  domain: str
  owner: str
  email: str
  zone_name: str | None = None  # Parent hosted zone; derived from domain if unset
  hosted_zone_id: str | None = None  # Skips the zone lookup when set
  region: str = "us-east-1"
  removal_policy: RemovalPolicy = RemovalPolicy.RETAIN
  record_ttl: int = TEN_MINUTES
  min_ttl: int = 0
  default_ttl: int = TEN_MINUTES
  max_ttl: int = TEN_MINUTES
  price_class: str = "PriceClass_100"
  error_page_path: str = "/404.html"
  index_document: str = "index.html"

  @property
  def parent_zone(self) -> str:
    """Name of the hosted zone the site's records live in."""
    if self.zone_name:
      return self.zone_name.rstrip(".")
    return decompose(self.domain).parent_domain.rstrip(".")

  @property
  def resource_prefix(self) -> str:
    return self.domain.replace(".", "-")


@dataclass
class Config:
  """Multi-site configuration."""

  sites: list[SiteConfig] = field(default_factory=list)

  @classmethod
  def from_yaml(cls, path: Path | str = "sites.yaml") -> "Config":
    """Load configuration from YAML file."""
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    defaults = data.get("defaults", {})
    sites: list[SiteConfig] = []

    for site_data in data.get("sites", []):
      # Merge defaults with site-specific config
      merged = {**defaults, **site_data}

      # Convert removal_policy string to enum
      removal_policy_str = merged.pop("removal_policy", "retain")
      removal_policy = {
        "retain": RemovalPolicy.RETAIN,
        "destroy": RemovalPolicy.DESTROY,
      }.get(removal_policy_str.lower(), RemovalPolicy.RETAIN)

      sites.append(
        SiteConfig(
          domain=merged["domain"],
          owner=merged["owner"],
          email=merged["email"],
          zone_name=merged.get("zone_name"),
          hosted_zone_id=merged.get("hosted_zone_id"),
          region=merged.get("region", "us-east-1"),
          removal_policy=removal_policy,
          record_ttl=int(merged.get("record_ttl", TEN_MINUTES)),
          min_ttl=int(merged.get("min_ttl", 0)),
          default_ttl=int(merged.get("default_ttl", TEN_MINUTES)),
          max_ttl=int(merged.get("max_ttl", TEN_MINUTES)),
          price_class=merged.get("price_class", "PriceClass_100"),
          error_page_path=merged.get("error_page_path", "/404.html"),
          index_document=merged.get("index_document", "index.html"),
        )
      )

    return cls(sites=sites)

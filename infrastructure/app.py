#!/usr/bin/env python3
"""CDK application entry point for static website infrastructure."""

import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import aws_cdk as cdk

from infrastructure.config import CERTIFICATE_REGION, Config, SiteConfig
from infrastructure.graph import build_site_graph
from infrastructure.lookups import get_account_id, resolve_hosted_zone_id
from infrastructure.stacks import CertificateStack, StaticSiteStack


def add_site(app: cdk.App, site: SiteConfig, account_id: str) -> StaticSiteStack:
  """Declare the certificate and site stacks for one site."""
  hosted_zone_id = site.hosted_zone_id
  if not hosted_zone_id:
    hosted_zone_id = resolve_hosted_zone_id(site.parent_zone)
    print(f"Resolved hosted zone {site.parent_zone} -> {hosted_zone_id}", file=sys.stderr)

  graph = build_site_graph(site, hosted_zone_id=hosted_zone_id)
  cross_region = site.region != CERTIFICATE_REGION

  certificate_stack = CertificateStack(
    app,
    f"SiteCertificate-{site.resource_prefix}",
    site_config=site,
    env=cdk.Environment(account=account_id, region=CERTIFICATE_REGION),
    cross_region_references=cross_region,
    description=f"ACM certificate for {site.domain}",
  )

  return StaticSiteStack(
    app,
    f"StaticSite-{site.resource_prefix}",
    site_config=site,
    graph=graph,
    certificate_stack=certificate_stack,
    env=cdk.Environment(account=account_id, region=site.region),
    cross_region_references=cross_region,
    description=f"Static website infrastructure for {site.domain}",
  )


def main() -> None:
  """Create CDK app with stacks for each configured site."""
  app = cdk.App()

  # Load configuration
  config_path = app.node.try_get_context("config") or "sites.yaml"
  config = Config.from_yaml(Path(config_path))

  # Get account ID from credentials
  account_id = get_account_id()

  for site in config.sites:
    add_site(app, site, account_id)

  app.synth()


if __name__ == "__main__":
  main()

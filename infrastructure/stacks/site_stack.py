"""CDK stack for a single static website."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from infrastructure.cdk_constructs import StaticSiteConstruct
from infrastructure.config import SiteConfig
from infrastructure.graph import DeclarationGraph


class StaticSiteStack(cdk.Stack):
  """Stack for a single static website."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    site_config: SiteConfig,
    graph: DeclarationGraph,
    certificate_stack: cdk.Stack | None = None,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    self.site = StaticSiteConstruct(
      self,
      "Site",
      graph=graph,
      certificate_scope=certificate_stack,
    )

    # Tag resources with owner info
    cdk.Tags.of(self).add("Owner", site_config.owner)
    cdk.Tags.of(self).add("OwnerEmail", site_config.email)
    cdk.Tags.of(self).add("Project", "static-sites")
    cdk.Tags.of(self).add("Domain", site_config.domain)

"""Certificate stack for CloudFront (must be in us-east-1)."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from infrastructure.config import SiteConfig


class CertificateStack(cdk.Stack):
  """Holds the region-pinned certificate declarations of a site.

  The StaticSiteStack renders the certificate, its validation record and the
  validation waiter into this stack; CloudFront only accepts certificates
  from us-east-1.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    site_config: SiteConfig,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    cdk.Tags.of(self).add("Owner", site_config.owner)
    cdk.Tags.of(self).add("OwnerEmail", site_config.email)
    cdk.Tags.of(self).add("Project", "static-sites")
    cdk.Tags.of(self).add("Domain", site_config.domain)

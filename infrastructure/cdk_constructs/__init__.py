"""CDK constructs for static website infrastructure."""

from .base import DeclaredResource
from .certificate import CertificateRequest, CertificateValidation
from .distribution import CloudFrontDistribution
from .dns import DnsRecord, HostedZoneRef
from .static_site import StaticSiteConstruct
from .storage import StorageBucket

__all__ = [
  "CertificateRequest",
  "CertificateValidation",
  "CloudFrontDistribution",
  "DeclaredResource",
  "DnsRecord",
  "HostedZoneRef",
  "StaticSiteConstruct",
  "StorageBucket",
]

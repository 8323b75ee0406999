"""CDK stacks for static website infrastructure."""

from .certificate_stack import CertificateStack
from .site_stack import StaticSiteStack

__all__ = ["CertificateStack", "StaticSiteStack"]

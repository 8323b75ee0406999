"""CloudFront distribution for static website."""

from typing import Any

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_route53_targets as targets
from constructs import Construct

from .base import DeclaredResource

Cfn = cloudfront.CfnDistribution


def _origin(origin: dict[str, Any]) -> Cfn.OriginProperty:
  custom = origin["custom_origin_config"]
  return Cfn.OriginProperty(
    id=origin["origin_id"],
    domain_name=origin["domain_name"],
    custom_origin_config=Cfn.CustomOriginConfigProperty(
      origin_protocol_policy=custom["origin_protocol_policy"],
      http_port=custom["http_port"],
      https_port=custom["https_port"],
      origin_ssl_protocols=custom["origin_ssl_protocols"],
    ),
  )


def _default_cache_behavior(behavior: dict[str, Any]) -> Cfn.DefaultCacheBehaviorProperty:
  forwarded = behavior["forwarded_values"]
  return Cfn.DefaultCacheBehaviorProperty(
    target_origin_id=behavior["target_origin_id"],
    viewer_protocol_policy=behavior["viewer_protocol_policy"],
    allowed_methods=behavior["allowed_methods"],
    cached_methods=behavior["cached_methods"],
    forwarded_values=Cfn.ForwardedValuesProperty(
      query_string=forwarded["query_string"],
      cookies=Cfn.CookiesProperty(forward=forwarded["cookies"]["forward"]),
    ),
    min_ttl=behavior["min_ttl"],
    default_ttl=behavior["default_ttl"],
    max_ttl=behavior["max_ttl"],
  )


class CloudFrontDistribution(DeclaredResource):
  """CloudFront distribution with S3 static website origin."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    attributes: dict[str, Any],
    region: str | None = None,
  ) -> None:
    super().__init__(scope, id, attributes=attributes, region=region)

    viewer_certificate = attributes["viewer_certificate"]
    geo_restriction = attributes["restrictions"]["geo_restriction"]

    self.distribution = Cfn(
      self,
      "Distribution",
      distribution_config=Cfn.DistributionConfigProperty(
        enabled=attributes["enabled"],
        aliases=attributes["aliases"],
        origins=[_origin(origin) for origin in attributes["origins"]],
        default_root_object=attributes["default_root_object"],
        default_cache_behavior=_default_cache_behavior(attributes["default_cache_behavior"]),
        price_class=attributes["price_class"],
        custom_error_responses=[
          Cfn.CustomErrorResponseProperty(
            error_code=response["error_code"],
            response_code=response["response_code"],
            response_page_path=response["response_page_path"],
          )
          for response in attributes["custom_error_responses"]
        ],
        restrictions=Cfn.RestrictionsProperty(
          geo_restriction=Cfn.GeoRestrictionProperty(
            restriction_type=geo_restriction["restriction_type"],
          ),
        ),
        viewer_certificate=Cfn.ViewerCertificateProperty(
          acm_certificate_arn=viewer_certificate["acm_certificate_arn"],
          ssl_support_method=viewer_certificate["ssl_support_method"],
        ),
      ),
    )

    self.outputs = {
      "domain_name": self.distribution.attr_domain_name,
      "hosted_zone_id": targets.CloudFrontTarget.get_hosted_zone_id(self),
    }

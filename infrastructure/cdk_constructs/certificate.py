"""ACM certificate with DNS validation, split into request and validation.

CloudFormation's own certificate resource hides the validation record it
needs, so the request is a custom resource that returns the validation
options as attributes. The validation record is then an ordinary record set
and the validation is a second custom resource that waits until ACM reports
the certificate as issued.
"""

from typing import Any

from aws_cdk import CustomResource, Duration
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from aws_cdk import custom_resources as cr
from constructs import Construct

from .base import DeclaredResource, camel_case


class CertificateRequest(DeclaredResource):
  """Requests an ACM certificate and exposes its DNS validation options."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    attributes: dict[str, Any],
    region: str | None = None,
  ) -> None:
    super().__init__(scope, id, attributes=attributes, region=region)

    handler = lambda_.Function(
      self,
      "Handler",
      runtime=lambda_.Runtime.PYTHON_3_12,
      handler="index.handler",
      code=lambda_.Code.from_inline(self._get_handler_code()),
      timeout=Duration.minutes(5),
    )

    # RequestCertificate doesn't support resource-level permissions
    handler.add_to_role_policy(
      iam.PolicyStatement(
        actions=[
          "acm:RequestCertificate",
          "acm:DescribeCertificate",
          "acm:DeleteCertificate",
        ],
        resources=["*"],
      )
    )

    provider = cr.Provider(self, "Provider", on_event_handler=handler)

    self.resource = CustomResource(
      self,
      "Resource",
      service_token=provider.service_token,
      resource_type="Custom::AcmCertificate",
      properties={
        "DomainName": attributes["domain_name"],
        "ValidationMethod": attributes["validation_method"],
        "Region": self.region,
      },
    )

  def output(self, attribute: str) -> Any:
    # The physical id of the custom resource is the certificate ARN
    if attribute == "arn":
      return self.resource.ref
    return self.resource.get_att_string(camel_case(attribute))

  def _get_handler_code(self) -> str:
    return """
import hashlib
import time

import boto3


def wait_for_options(acm, arn):
    # ACM fills in the validation records a few seconds after the request
    for _ in range(60):
        certificate = acm.describe_certificate(CertificateArn=arn)["Certificate"]
        options = certificate.get("DomainValidationOptions", [])
        if options and all("ResourceRecord" in option for option in options):
            return options
        time.sleep(2)
    raise RuntimeError(f"No DNS validation options for {arn}")


def handler(event, context):
    request_type = event["RequestType"]
    props = event["ResourceProperties"]
    acm = boto3.client("acm", region_name=props["Region"])

    if request_type == "Delete":
        arn = event["PhysicalResourceId"]
        if arn.startswith("arn:"):
            try:
                acm.delete_certificate(CertificateArn=arn)
                print(f"Deleted certificate {arn}")
            except acm.exceptions.ResourceNotFoundException:
                print(f"Certificate {arn} already gone")
        return {"PhysicalResourceId": arn}

    old = event.get("OldResourceProperties", {})
    unchanged = (
        request_type == "Update"
        and old.get("DomainName") == props["DomainName"]
        and old.get("ValidationMethod") == props["ValidationMethod"]
    )
    if unchanged:
        arn = event["PhysicalResourceId"]
    else:
        token = hashlib.sha256(event["RequestId"].encode()).hexdigest()[:32]
        response = acm.request_certificate(
            DomainName=props["DomainName"],
            ValidationMethod=props["ValidationMethod"],
            IdempotencyToken=token,
        )
        arn = response["CertificateArn"]
        print(f"Requested certificate {arn} for {props['DomainName']}")

    data = {"Arn": arn}
    for index, option in enumerate(wait_for_options(acm, arn)):
        record = option["ResourceRecord"]
        prefix = f"DomainValidationOptions.{index}"
        data[f"{prefix}.DomainName"] = option["DomainName"]
        data[f"{prefix}.ResourceRecordName"] = record["Name"]
        data[f"{prefix}.ResourceRecordType"] = record["Type"]
        data[f"{prefix}.ResourceRecordValue"] = record["Value"]

    return {"PhysicalResourceId": arn, "Data": data}
"""


class CertificateValidation(DeclaredResource):
  """Waits until ACM has issued a certificate after its record is published."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    attributes: dict[str, Any],
    region: str | None = None,
  ) -> None:
    super().__init__(scope, id, attributes=attributes, region=region)

    on_event = lambda_.Function(
      self,
      "Handler",
      runtime=lambda_.Runtime.PYTHON_3_12,
      handler="index.on_event",
      code=lambda_.Code.from_inline(self._get_handler_code()),
      timeout=Duration.seconds(30),
    )
    is_complete = lambda_.Function(
      self,
      "IsCompleteHandler",
      runtime=lambda_.Runtime.PYTHON_3_12,
      handler="index.is_complete",
      code=lambda_.Code.from_inline(self._get_handler_code()),
      timeout=Duration.seconds(30),
    )
    is_complete.add_to_role_policy(
      iam.PolicyStatement(
        actions=["acm:DescribeCertificate"],
        resources=["*"],
      )
    )

    provider = cr.Provider(
      self,
      "Provider",
      on_event_handler=on_event,
      is_complete_handler=is_complete,
      query_interval=Duration.seconds(30),
      total_timeout=Duration.minutes(75),
    )

    self.resource = CustomResource(
      self,
      "Resource",
      service_token=provider.service_token,
      resource_type="Custom::AcmCertificateValidation",
      properties={
        "CertificateArn": attributes["certificate_arn"],
        "ValidationRecordFqdns": attributes["validation_record_fqdns"],
        "Region": self.region,
      },
    )

    self.outputs = {
      "certificate_arn": self.resource.get_att_string("CertificateArn"),
    }

  def _get_handler_code(self) -> str:
    return """
import boto3


def on_event(event, context):
    props = event["ResourceProperties"]
    if event["RequestType"] == "Delete":
        return {"PhysicalResourceId": event["PhysicalResourceId"]}

    print(f"Waiting on records {props['ValidationRecordFqdns']}")
    return {"PhysicalResourceId": props["CertificateArn"]}


def is_complete(event, context):
    if event["RequestType"] == "Delete":
        return {"IsComplete": True}

    props = event["ResourceProperties"]
    arn = props["CertificateArn"]
    acm = boto3.client("acm", region_name=props["Region"])
    status = acm.describe_certificate(CertificateArn=arn)["Certificate"]["Status"]
    print(f"Certificate {arn} is {status}")

    if status == "ISSUED":
        return {"IsComplete": True, "Data": {"CertificateArn": arn}}
    if status == "PENDING_VALIDATION":
        return {"IsComplete": False}
    raise RuntimeError(f"Certificate {arn} validation ended in {status}")
"""

"""Static site infrastructure: S3, CloudFront, ACM and Route 53."""

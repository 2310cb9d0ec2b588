"""
Three-tier topology composer.

Declares a small AWS deployment and composes it into an ordered
provisioning plan:
- VPC with public and private-with-egress subnets across two AZs
- Security groups for the edge, compute and data tiers
- Auto scaling group behind an internet-facing ALB
- RDS database (PostgreSQL or MySQL) with a generated credential

The plan is rendered by the Pulumi program in topology.__main__.
"""

"""
Pulumi program entry point for the three-tier topology.

1. Load settings and stack config overrides
2. Compose the provisioning plan (fails before any resource on bad input)
3. Render the plan in creation order:
   VPC -> Secret -> Security Groups -> Auto Scaling, RDS -> ALB
4. Export ALB-DNS and RDS-Endpoint
"""

import pulumi

from topology.composers import compose_plan
from topology.configs.environment import load_raw_parameters
from topology.configs.settings import get_settings
from topology.render import render_plan
from topology.utils import ResourceNamer, configure_logging


def main() -> None:
    """Deploy the topology."""
    settings = get_settings()
    configure_logging(settings.log_level)
    namer = ResourceNamer(project=settings.project, environment=settings.environment)

    plan = compose_plan(load_raw_parameters())
    pulumi.log.info(f"Composed plan: {' -> '.join(plan.order)}")

    outputs = render_plan(plan, namer)

    # Export to Pulumi stack
    for key, value in outputs.items():
        pulumi.export(key, value)


# Execute
main()

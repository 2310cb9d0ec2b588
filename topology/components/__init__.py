"""
Pulumi component resources, one per provisioning plan entity.
"""

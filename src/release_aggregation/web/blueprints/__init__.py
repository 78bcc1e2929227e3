"""API blueprints for release aggregation."""

from release_aggregation.web.blueprints.releases import ReleasesBlueprint

__all__ = ["ReleasesBlueprint"]

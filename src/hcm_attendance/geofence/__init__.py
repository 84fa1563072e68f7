from .evaluator import FenceCheck, GeoFence, LocationFix, distance_meters, within_fence

__all__ = ["FenceCheck", "GeoFence", "LocationFix", "distance_meters", "within_fence"]

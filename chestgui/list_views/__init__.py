from .placement_list import PlacementList
from .placement_settings import PlacementSettings

__all__ = ["PlacementList", "PlacementSettings"]

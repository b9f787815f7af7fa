from typing import Optional

from chestgui.core.defs import Placement, Preset


def parse_int(
    text, minimum: Optional[int] = None, maximum: Optional[int] = None
) -> Optional[int]:
    """
    Parse numeric UI input, returning None for anything non-numeric or
    outside ``[minimum, maximum]``.
    """
    try:
        value = int(float(str(text).strip()))
    except (TypeError, ValueError, OverflowError):
        return None
    if minimum is not None and value < minimum:
        return None
    if maximum is not None and value > maximum:
        return None
    return value


def _pair(data: dict, key: str, default, index: int) -> tuple:
    value = data.get(key, default)
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"Placement entry {index}: '{key}' takes two values")
    return tuple(value)


def placement_from_dict(data: dict, index: int = 0) -> Placement:
    """
    Build a placement from a layout config entry.

    Args:
        data (dict): Entry with ``name`` and optional ``offset``, ``size``
            and ``preset`` (a preset value, display name or row count).
        index (int): Position of the entry, used for its id.

    Returns:
        Placement: The placement, offsets left None when not given.
    """
    if not isinstance(data, dict) or "name" not in data:
        raise ValueError(f"Placement entry {index} needs at least a 'name'")
    offset = _pair(data, "offset", (None, None), index)
    size = _pair(data, "size", (176, 166), index)
    try:
        offset_x, offset_y = (None if v is None else int(v) for v in offset)
        width, height = (int(v) for v in size)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Placement entry {index}: {e}") from e
    if width < 1 or height < 1:
        raise ValueError(f"Placement entry {index}: size must be positive")
    return Placement(
        placement_id=str(data.get("id", index)),
        name=str(data["name"]),
        offset_x=offset_x,
        offset_y=offset_y,
        width=width,
        height=height,
        preset=Preset.coerce(data.get("preset", Preset.ROW6)),
    )


def layout_from_config(layout_config: dict) -> list[Placement]:
    """Read the ``placements`` list of a layout config dict."""
    if not isinstance(layout_config, dict):
        raise ValueError("layout_config must be a dict")
    entries = layout_config.get("placements")
    if not isinstance(entries, (list, tuple)):
        raise ValueError("layout_config must define a 'placements' list")
    return [placement_from_dict(entry, idx) for idx, entry in enumerate(entries)]
